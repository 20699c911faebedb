"""Shared enums for models."""

from enum import Enum


class Brand(str, Enum):
    """Business entity a project is produced for and invoiced to."""

    WAMI_LIVE = "Wami Live"
    LUCK_ON_FOURTH = "Luck On Fourth"
    THE_HIDEOUT = "The Hideout"

    @property
    def client_name(self) -> str:
        """Legal name printed in the invoice BILL TO block."""
        return BRAND_CLIENTS[self]

    @property
    def file_stem(self) -> str:
        """Upper snake case name used in exported file names."""
        return "_".join(self.value.split()).upper()


BRAND_CLIENTS: dict[Brand, str] = {
    Brand.WAMI_LIVE: "WAMI LIVE INC",
    Brand.LUCK_ON_FOURTH: "In And Out Gaming LLC",
    Brand.THE_HIDEOUT: "The Hideout Gaming LLC",
}


class ProjectType(str, Enum):
    """Kind of creative deliverable."""

    FLYER = "Flyer"
    PROMO_VIDEO = "Promo Video"


class ProjectStatus(str, Enum):
    """Project workflow status."""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
