"""Organization scope discovery and selection."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from vercel_cli.prompts import Prompter


class OrgClient(Protocol):
    """API operations needed to list scopes."""

    current_team: str | None

    def fetch(self, path: str, **kwargs: Any) -> dict[str, Any]: ...

    def fetch_paginated(self, path: str, **kwargs: Any) -> Iterator[dict[str, Any]]: ...


@dataclass(frozen=True)
class Org:
    """A personal account or a team that can own projects."""

    type: str
    id: str
    slug: str


def list_orgs(client: OrgClient) -> list[Org]:
    """Return the personal account followed by every team of the user."""
    user = client.fetch("/v2/user").get("user") or {}
    orgs = [
        Org(
            type="user",
            id=str(user.get("id") or user.get("uid") or ""),
            slug=str(user.get("username") or user.get("email") or "me"),
        )
    ]
    for page in client.fetch_paginated("/v2/teams"):
        for team in page.get("teams", []):
            orgs.append(Org(type="team", id=str(team["id"]), slug=str(team["slug"])))
    return orgs


def select_org(
    client: OrgClient,
    prompter: Prompter,
    message: str,
    *,
    yes: bool,
) -> Org:
    """Pick the org scope, defaulting to the client's current team.

    With ``yes`` the current scope is returned without prompting. The chosen
    org becomes the client's current team (``None`` for a personal account).
    """
    # Team lookups must not be scoped to a previously selected team.
    previous_team = client.current_team
    client.current_team = None
    try:
        orgs = list_orgs(client)
    finally:
        client.current_team = previous_team

    default = next((org for org in orgs if org.id == previous_team), orgs[0])
    if yes or len(orgs) == 1:
        selected = default
    else:
        by_slug = {org.slug: org for org in orgs}
        answer = prompter.select(message, [org.slug for org in orgs], default=default.slug)
        selected = by_slug[answer]
    client.current_team = selected.id if selected.type == "team" else None
    return selected
