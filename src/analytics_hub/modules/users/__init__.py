"""User records and their authorization projection."""
