"""spacectl — manage spaces inside organizations on a multi-tenant platform."""

__version__ = "0.1.0"
