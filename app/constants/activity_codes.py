# app/constants/activity_codes.py

from enum import Enum


class ActivityCode(str, Enum):
    # AUTH
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    SIGNUP = "SIGNUP"
    LINK_IDENTITY = "LINK_IDENTITY"

    # USERS
    CREATE_USER = "CREATE_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"

    # WAREHOUSE SETUP
    CREATE_WAREHOUSE = "CREATE_WAREHOUSE"
    UPDATE_WAREHOUSE = "UPDATE_WAREHOUSE"
    DELETE_WAREHOUSE = "DELETE_WAREHOUSE"

    CREATE_ZONE = "CREATE_ZONE"
    UPDATE_ZONE = "UPDATE_ZONE"
    DELETE_ZONE = "DELETE_ZONE"

    CREATE_LOCATION = "CREATE_LOCATION"
    UPDATE_LOCATION = "UPDATE_LOCATION"
    DELETE_LOCATION = "DELETE_LOCATION"

    CREATE_DOOR = "CREATE_DOOR"
    UPDATE_DOOR = "UPDATE_DOOR"
    DELETE_DOOR = "DELETE_DOOR"

    # MASTERS
    CREATE_CUSTOMER = "CREATE_CUSTOMER"
    UPDATE_CUSTOMER = "UPDATE_CUSTOMER"
    DELETE_CUSTOMER = "DELETE_CUSTOMER"

    CREATE_SUPPLIER = "CREATE_SUPPLIER"
    UPDATE_SUPPLIER = "UPDATE_SUPPLIER"
    DELETE_SUPPLIER = "DELETE_SUPPLIER"

    CREATE_CONTACT = "CREATE_CONTACT"
    UPDATE_CONTACT = "UPDATE_CONTACT"
    DELETE_CONTACT = "DELETE_CONTACT"

    CREATE_ITEM = "CREATE_ITEM"
    UPDATE_ITEM = "UPDATE_ITEM"
    DELETE_ITEM = "DELETE_ITEM"

    CREATE_UOM = "CREATE_UOM"
    UPDATE_UOM = "UPDATE_UOM"
    DELETE_UOM = "DELETE_UOM"
