"""HTTP surface of the Energy Accounts service."""
