"""Application: autorización y handle auditado."""
