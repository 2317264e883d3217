# backend/spotbnb/routes/__init__.py
"""HTTP routers: resource routes live in ``v1``; ops endpoints beside them."""
