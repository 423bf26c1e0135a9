"""REST API client and scope helpers."""

from __future__ import annotations

from vercel_cli.client.api import ApiClient
from vercel_cli.client.orgs import Org, list_orgs, select_org

__all__ = ["ApiClient", "Org", "list_orgs", "select_org"]
