# app/routers/__init__.py

from .users.user_router import router as user_router

from .auth.auth_router import router as auth_router
from .auth.activity_router import router as activity_router

from .warehouse.warehouse_router import router as warehouse_router
from .warehouse.zone_router import router as zone_router
from .warehouse.location_router import router as location_router
from .warehouse.door_router import router as door_router

from .masters.customer_router import router as customer_router
from .masters.supplier_router import router as supplier_router
from .masters.contact_router import router as contact_router
from .masters.item_router import router as item_router
from .masters.uom_router import router as uom_router


__all__ = [
"user_router",

"auth_router",
"activity_router",

"warehouse_router",
"zone_router",
"location_router",
"door_router",

"customer_router",
"supplier_router",
"contact_router",
"item_router",
"uom_router",
]
