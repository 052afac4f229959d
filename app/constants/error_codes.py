# app/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NO_CHANGES = "NO_CHANGES"

    # ---------------- AUTH ----------------
    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_INVALID = "TOKEN_INVALID"
    USER_INACTIVE = "USER_INACTIVE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"
    UNSUPPORTED_PROVIDER = "UNSUPPORTED_PROVIDER"
    DEFAULT_TENANT_MISSING = "DEFAULT_TENANT_MISSING"

    # ---------------- WAREHOUSES ----------------
    WAREHOUSE_NOT_FOUND = "WAREHOUSE_NOT_FOUND"
    WAREHOUSE_CODE_EXISTS = "WAREHOUSE_CODE_EXISTS"
    WAREHOUSE_HAS_DEPENDENTS = "WAREHOUSE_HAS_DEPENDENTS"

    # ---------------- ZONES ----------------
    ZONE_NOT_FOUND = "ZONE_NOT_FOUND"
    ZONE_CODE_EXISTS = "ZONE_CODE_EXISTS"
    ZONE_HAS_DEPENDENTS = "ZONE_HAS_DEPENDENTS"

    # ---------------- LOCATIONS ----------------
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    LOCATION_CODE_EXISTS = "LOCATION_CODE_EXISTS"
    LOCATION_BARCODE_EXISTS = "LOCATION_BARCODE_EXISTS"
    LOCATION_QR_CODE_EXISTS = "LOCATION_QR_CODE_EXISTS"

    # ---------------- DOORS ----------------
    DOOR_NOT_FOUND = "DOOR_NOT_FOUND"
    DOOR_NUMBER_EXISTS = "DOOR_NUMBER_EXISTS"

    # ---------------- CUSTOMERS ----------------
    CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
    CUSTOMER_CODE_EXISTS = "CUSTOMER_CODE_EXISTS"
    CUSTOMER_HAS_DEPENDENTS = "CUSTOMER_HAS_DEPENDENTS"

    # ---------------- SUPPLIERS ----------------
    SUPPLIER_NOT_FOUND = "SUPPLIER_NOT_FOUND"
    SUPPLIER_EMAIL_EXISTS = "SUPPLIER_EMAIL_EXISTS"

    # ---------------- CONTACTS ----------------
    CONTACT_NOT_FOUND = "CONTACT_NOT_FOUND"

    # ---------------- ITEMS ----------------
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    ITEM_CODE_EXISTS = "ITEM_CODE_EXISTS"
    ITEM_HAS_DEPENDENTS = "ITEM_HAS_DEPENDENTS"

    # ---------------- UOMS ----------------
    UOM_NOT_FOUND = "UOM_NOT_FOUND"
    UOM_CODE_EXISTS = "UOM_CODE_EXISTS"
    UOM_HAS_DEPENDENTS = "UOM_HAS_DEPENDENTS"

    # ---------------- USERS ----------------
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_EMAIL_EXISTS = "USER_EMAIL_EXISTS"
    CANNOT_DELETE_SELF = "CANNOT_DELETE_SELF"
