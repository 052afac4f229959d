import enum


class UOMType(str, enum.Enum):
    base = "base"
    case = "case"
    pallet = "pallet"
    carton = "carton"
    box = "box"
    pack = "pack"
    bundle = "bundle"
    roll = "roll"
    sheet = "sheet"
    length = "length"
    weight = "weight"
    volume = "volume"
    custom = "custom"
