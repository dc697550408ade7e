"""sandycal: mood calendar with friends."""
