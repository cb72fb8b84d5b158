"""Business services: token issuance, role gating, stores and pagination."""
