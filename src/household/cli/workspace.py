#!/usr/bin/env python3
"""
Workspace CLI - Workspace Setup and Membership
"""

import json

import click

from ..core.models import MemberRole, SplitMethod, WorkspaceType
from .context import get_store, parse_amount, require_user, store_errors


@click.group()
def workspace() -> None:
    """Workspace setup and membership commands."""
    pass


@workspace.command()
@click.argument("name")
@click.option(
    "--type",
    "workspace_type",
    type=click.Choice([t.value for t in WorkspaceType]),
    default=WorkspaceType.PERSONAL.value,
    show_default=True,
    help="Workspace type",
)
@click.option(
    "--split-method",
    type=click.Choice([m.value for m in SplitMethod]),
    help="Split method for split workspaces (default: 50/50)",
)
@click.option("--owner-share", type=click.IntRange(0, 100), help="Owner percentage for the custom split method")
@click.option("--target", help="Monthly pooled target for joint workspaces (dollars)")
@click.option("--budget", "monthly_budget", help="Overall monthly budget (dollars)")
@click.option("--id", "workspace_id", help="Explicit workspace id (default: generated)")
@click.pass_context
def create(
    ctx: click.Context,
    name: str,
    workspace_type: str,
    split_method: str | None,
    owner_share: int | None,
    target: str | None,
    monthly_budget: str | None,
    workspace_id: str | None,
) -> None:
    """
    Create a workspace owned by the acting user.

    Examples:
      household --user alice workspace create Home --type split
      household --user alice workspace create Flat --type split --split-method custom --owner-share 60
      household --user alice workspace create Pool --type joint --target 2000
    """
    owner_id = require_user(ctx)
    method = SplitMethod(split_method) if split_method else None
    custom_config = json.dumps({"owner": owner_share}) if owner_share is not None else None

    if custom_config and method != SplitMethod.CUSTOM:
        raise click.UsageError("--owner-share requires --split-method custom")

    store = get_store(ctx)
    with store_errors():
        created = store.create_workspace(
            name=name,
            workspace_type=WorkspaceType(workspace_type),
            owner_id=owner_id,
            split_method=method,
            custom_split_config=custom_config,
            monthly_target=parse_amount(target) if target else None,
            monthly_budget=parse_amount(monthly_budget) if monthly_budget else None,
            workspace_id=workspace_id,
        )

    click.echo(f"Created workspace {created.id}")
    click.echo(f"  Name: {created.name}")
    click.echo(f"  Type: {created.type.value}")
    if created.split_method:
        click.echo(f"  Split: {created.split_method.value}")
    if created.monthly_target is not None:
        click.echo(f"  Monthly Target: {created.monthly_target}")


@workspace.command("add-member")
@click.argument("workspace_id")
@click.argument("user_id")
@click.option(
    "--role",
    type=click.Choice([MemberRole.ADMIN.value, MemberRole.MEMBER.value]),
    default=MemberRole.MEMBER.value,
    show_default=True,
)
@click.pass_context
def add_member(ctx: click.Context, workspace_id: str, user_id: str, role: str) -> None:
    """Add a user to a workspace."""
    store = get_store(ctx)
    with store_errors():
        member = store.add_member(workspace_id, user_id, MemberRole(role))
    click.echo(f"{member.user_id} is a {member.role.value} of {workspace_id}")


@workspace.command("list")
@click.pass_context
def list_workspaces(ctx: click.Context) -> None:
    """List stored workspaces."""
    store = get_store(ctx)
    workspace_ids = store.list_workspace_ids()
    if not workspace_ids:
        click.echo("No workspaces found.")
        return

    with store_errors():
        for workspace_id in workspace_ids:
            click.echo(f"{workspace_id}: {store.summary_text(workspace_id)}")


@workspace.command()
@click.argument("workspace_id")
@click.pass_context
def show(ctx: click.Context, workspace_id: str) -> None:
    """Show workspace settings and members."""
    store = get_store(ctx)
    with store_errors():
        ws = store.get_workspace(workspace_id)
        members = store.list_members(workspace_id)

    click.echo(f"{ws.name} ({ws.id})")
    click.echo(f"  Type: {ws.type.value}")
    click.echo(f"  Currency: {ws.currency}")
    if ws.split_method:
        click.echo(f"  Split: {ws.split_method.value}")
    if ws.custom_split_config:
        click.echo(f"  Custom Split: {ws.custom_split_config}")
    if ws.overall_limit is not None:
        click.echo(f"  Overall Limit: {ws.overall_limit}")
    click.echo("  Members:")
    for member in members:
        click.echo(f"    {member.user_id} ({member.role.value})")
