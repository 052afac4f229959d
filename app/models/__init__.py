# Tenancy
from app.models.tenancy.tenant_models import Tenant

# Users and audit
from app.models.users.user_models import User
from app.models.support.activity_models import UserActivity

# Warehouse setup
from app.models.warehouse.warehouse_models import Warehouse
from app.models.warehouse.zone_models import Zone
from app.models.warehouse.location_models import Location
from app.models.warehouse.door_models import Door

# Masters
from app.models.masters.customer_models import Customer
from app.models.masters.supplier_models import Supplier
from app.models.masters.contact_models import Contact
from app.models.masters.item_models import Item
from app.models.masters.uom_models import UOM
