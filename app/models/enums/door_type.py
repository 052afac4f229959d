import enum


class DoorType(str, enum.Enum):
    inbound = "inbound"
    outbound = "outbound"
    staging = "staging"
