"""HTTP access to the Porefect API."""
