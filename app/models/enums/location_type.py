import enum


class LocationType(str, enum.Enum):
    floor = "floor"
    rack = "rack"
    shelf = "shelf"
    bin = "bin"
    dock = "dock"
    staging_area = "staging_area"
    bulk_area = "bulk_area"
