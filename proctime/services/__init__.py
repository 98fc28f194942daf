"""Services built on top of the platform timers."""
