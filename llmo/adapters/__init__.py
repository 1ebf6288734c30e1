"""Adapters connecting the diagnosis core to the outside world."""
