"""assertgen - configure and drive assertion-class generation per source set."""

__version__ = "0.1.0"
