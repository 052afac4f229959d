import enum


class ZoneType(str, enum.Enum):
    receiving = "receiving"
    staging = "staging"
    storage = "storage"
    picking = "picking"
    packing = "packing"
    shipping = "shipping"
    quarantine = "quarantine"
    returns = "returns"
    cross_dock = "cross_dock"
