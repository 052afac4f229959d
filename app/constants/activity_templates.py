from app.constants.activity_codes import ActivityCode


ACTIVITY_TEMPLATES = {
    # ---------------- AUTH ----------------
    ActivityCode.LOGIN:
        "{actor_role} ({actor_email}) logged in",

    ActivityCode.LOGOUT:
        "{actor_role} ({actor_email}) logged out",

    ActivityCode.SIGNUP:
        "{actor_email} signed up and joined tenant {tenant_name}",

    ActivityCode.LINK_IDENTITY:
        "{actor_email} linked a {provider} identity to their account",

    # ---------------- USERS ----------------
    ActivityCode.CREATE_USER:
        "{actor_role} ({actor_email}) created user {target_email} with role {target_role}",

    ActivityCode.UPDATE_USER:
        "{actor_role} ({actor_email}) updated user {target_email}: {changes}",

    ActivityCode.DELETE_USER:
        "{actor_role} ({actor_email}) deleted user {target_email}",

    # ---------------- WAREHOUSES ----------------
    ActivityCode.CREATE_WAREHOUSE:
        "{actor_role} ({actor_email}) created warehouse {target_name} ({target_code})",

    ActivityCode.UPDATE_WAREHOUSE:
        "{actor_role} ({actor_email}) updated warehouse {target_name} ({target_code}): {changes}",

    ActivityCode.DELETE_WAREHOUSE:
        "{actor_role} ({actor_email}) deleted warehouse {target_name} ({target_code})",

    # ---------------- ZONES ----------------
    ActivityCode.CREATE_ZONE:
        "{actor_role} ({actor_email}) created zone {target_code} in warehouse {warehouse_code}",

    ActivityCode.UPDATE_ZONE:
        "{actor_role} ({actor_email}) updated zone {target_code}: {changes}",

    ActivityCode.DELETE_ZONE:
        "{actor_role} ({actor_email}) deleted zone {target_code}",

    # ---------------- LOCATIONS ----------------
    ActivityCode.CREATE_LOCATION:
        "{actor_role} ({actor_email}) created location {target_code} in warehouse {warehouse_code}",

    ActivityCode.UPDATE_LOCATION:
        "{actor_role} ({actor_email}) updated location {target_code}: {changes}",

    ActivityCode.DELETE_LOCATION:
        "{actor_role} ({actor_email}) deleted location {target_code}",

    # ---------------- DOORS ----------------
    ActivityCode.CREATE_DOOR:
        "{actor_role} ({actor_email}) created door {target_code} in warehouse {warehouse_code}",

    ActivityCode.UPDATE_DOOR:
        "{actor_role} ({actor_email}) updated door {target_code}: {changes}",

    ActivityCode.DELETE_DOOR:
        "{actor_role} ({actor_email}) deleted door {target_code}",

    # ---------------- CUSTOMERS ----------------
    ActivityCode.CREATE_CUSTOMER:
        "{actor_role} ({actor_email}) created customer {target_name} ({target_code})",

    ActivityCode.UPDATE_CUSTOMER:
        "{actor_role} ({actor_email}) updated customer {target_name}: {changes}",

    ActivityCode.DELETE_CUSTOMER:
        "{actor_role} ({actor_email}) deleted customer {target_name}",

    # ---------------- SUPPLIERS ----------------
    ActivityCode.CREATE_SUPPLIER:
        "{actor_role} ({actor_email}) created supplier {target_name}",

    ActivityCode.UPDATE_SUPPLIER:
        "{actor_role} ({actor_email}) updated supplier {target_name}: {changes}",

    ActivityCode.DELETE_SUPPLIER:
        "{actor_role} ({actor_email}) deleted supplier {target_name}",

    # ---------------- CONTACTS ----------------
    ActivityCode.CREATE_CONTACT:
        "{actor_role} ({actor_email}) added contact {target_name} to customer {customer_name}",

    ActivityCode.UPDATE_CONTACT:
        "{actor_role} ({actor_email}) updated contact {target_name}: {changes}",

    ActivityCode.DELETE_CONTACT:
        "{actor_role} ({actor_email}) deleted contact {target_name}",

    # ---------------- ITEMS ----------------
    ActivityCode.CREATE_ITEM:
        "{actor_role} ({actor_email}) created item {target_name} ({target_code})",

    ActivityCode.UPDATE_ITEM:
        "{actor_role} ({actor_email}) updated item {target_code}: {changes}",

    ActivityCode.DELETE_ITEM:
        "{actor_role} ({actor_email}) deleted item {target_code}",

    # ---------------- UOMS ----------------
    ActivityCode.CREATE_UOM:
        "{actor_role} ({actor_email}) created UOM {target_code} for item {item_code}",

    ActivityCode.UPDATE_UOM:
        "{actor_role} ({actor_email}) updated UOM {target_code}: {changes}",

    ActivityCode.DELETE_UOM:
        "{actor_role} ({actor_email}) deleted UOM {target_code}",
}
