"""mailrelay: identity, authorization and sender resolution for a Microsoft 365 mail relay."""

__version__ = "1.0.0"
