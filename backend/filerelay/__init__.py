"""filerelay: a minimal HTTP file-transfer service."""
