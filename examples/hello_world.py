"""
scoped_rbac: Hello World

Declare permission modules, fold them into a registry, build predicates,
and evaluate them against whatever your request handler knows about the
caller.
"""

from enum import Enum

from scoped_rbac import DuplicateScopeError, build_registry, create_expression, create_module


class UserPermissions(str, Enum):
    READ = "READ"
    WRITE = "WRITE"
    DELETE = "DELETE"


class TeamPermissions(str, Enum):
    READ = "READ"
    MANAGE = "MANAGE"


# ─── Your session data (anything, decoupled from the library) ───

SESSIONS = {
    "alice": {"user": [UserPermissions.READ, UserPermissions.WRITE], "team": [TeamPermissions.MANAGE]},
    "bob": {"user": [UserPermissions.READ], "team": []},
    "eve": {"user": None},
}


def main():
    # ──────────────────────────────────────
    #  1. Build the registry once, at start-up
    # ──────────────────────────────────────
    registry = build_registry(
        create_module(UserPermissions)("user"),
        create_module(TeamPermissions)("team"),
    )

    try:
        build_registry(create_module(TeamPermissions)("user"), registry=registry)
    except DuplicateScopeError as e:
        print(f"  [CONFIG] {e}")

    # ──────────────────────────────────────
    #  2. Compose predicates
    # ──────────────────────────────────────
    has, not_, and_, or_ = create_expression(registry, strict=True)

    can_edit = and_([has("user.READ"), or_([has("user.WRITE"), has("team.MANAGE")])])
    read_only = and_([has("user.READ"), not_("user.WRITE")])

    # ──────────────────────────────────────
    #  3. Evaluate per request
    # ──────────────────────────────────────
    for name, context in SESSIONS.items():
        print(f"  {name:<6} can_edit={can_edit(context)!s:<5} read_only={read_only(context)}")

    print(f"  scopes referenced by can_edit: {sorted(can_edit.scopes())}")


if __name__ == "__main__":
    main()
