"""Core — math primitives, domain records and input contracts."""
