"""
Database schema, placeholder data, and seeding.

The HTTP trigger lives in the seed service. This package is for repo-level DB operations:
- Fixed dashboard schema (idempotent DDL)
- Placeholder records for users, customers, invoices, revenue
- Seed orchestrator and CLI
"""
