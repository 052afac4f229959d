import enum


class ItemType(str, enum.Enum):
    finished_good = "finished_good"
    raw_material = "raw_material"
    component = "component"
    packaging = "packaging"
    consumable = "consumable"
    tool = "tool"
    equipment = "equipment"


class ItemStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    discontinued = "discontinued"
    pending_approval = "pending_approval"


class AbcClassification(str, enum.Enum):
    A = "A"
    B = "B"
    C = "C"


class VelocityClassification(str, enum.Enum):
    fast = "fast"
    medium = "medium"
    slow = "slow"
