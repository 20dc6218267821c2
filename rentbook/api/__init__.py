"""HTTP API for tenants, rent records and notices."""
