"""Course catalog service: CRUD over courses."""
