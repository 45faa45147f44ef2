"""Generated CRUD service for bank accounts."""
