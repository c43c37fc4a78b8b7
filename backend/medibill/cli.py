# Overview: Flask CLI command groups for inspecting grants, navigation and the session slot.

# backend/medibill/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to medibill (PowerShell: $env:FLASK_APP="medibill").
# - Use: python -m flask <group> <command> [options]
#
# Permission inspection:
# - python -m flask perms list [--role CASHIER]
#   Print the grant matrix (optionally for one role).
# - python -m flask perms check MANAGER employees delete
#   Check whether a role is granted an action on a resource.
#
# Navigation inspection:
# - python -m flask nav show --role PHARMACIST
#   Print the sidebar entries visible to a role.
#
# Session slot:
# - python -m flask session show
#   Print the principal currently persisted on this terminal.
# - python -m flask session clear
#   Log out and clear the persisted slot.

import click
from flask import current_app
from flask.cli import with_appcontext

from .context import get_navigation, get_session_store
from .navigation import visible_tree
from .permissions import get_grant_matrix, is_granted, parse_role
from .services.session_service import Principal


def _role_option(value):
    if value is None:
        return None
    role = parse_role(value)
    if role is None:
        raise click.BadParameter(f"Unknown role '{value}'")
    return role


@click.group('perms')
def perms_group():
    """Permission inspection commands."""


@perms_group.command('list')
@click.option('--role', 'role_name', default=None, help='Only show this role')
def list_perms(role_name):
    """Print the role -> resource -> actions grant table."""
    role = _role_option(role_name)
    rows = get_grant_matrix(role)

    click.echo(f"\n{'='*80}")
    click.echo(f"{'Role':<16} {'Resource':<22} {'Actions'}")
    click.echo(f"{'='*80}")
    for row in rows:
        click.echo(f"{row['role']:<16} {row['resource']:<22} {', '.join(row['actions'])}")
    click.echo(f"{'='*80}")
    click.echo(f"\n Total: {len(rows)} grants\n")


@perms_group.command('check')
@click.argument('role_name')
@click.argument('resource')
@click.argument('action')
def check_perm(role_name, resource, action):
    """Check whether ROLE may perform ACTION on RESOURCE."""
    role = _role_option(role_name)
    if is_granted(role, resource, action):
        click.echo(f"GRANTED {role.value} -> {resource}:{action}")
    else:
        click.echo(f"DENIED  {role.value} -> {resource}:{action}")


@click.group('nav')
def nav_group():
    """Navigation inspection commands."""


@nav_group.command('show')
@click.option('--role', 'role_name', required=True, help='Role to preview the sidebar for')
@with_appcontext
def show_nav(role_name):
    """Print the sidebar tree visible to a role."""
    role = _role_option(role_name)
    preview = Principal(id="preview", display_name="Preview", role=role)

    def _echo(entries, depth):
        for entry in entries:
            click.echo(f"{'  ' * depth}- {entry.label} ({entry.target})")
            _echo(entry.children, depth + 1)

    tree = visible_tree(get_navigation(), preview)
    click.echo(f"\nSidebar for {role.value}:")
    if not tree:
        click.echo("  (no entries)")
    _echo(tree, 1)
    click.echo("")


@click.group('session')
def session_group():
    """Persisted session slot commands."""


@session_group.command('show')
@with_appcontext
def show_session():
    """Print the principal restored for this terminal."""
    store = get_session_store()
    principal = store.principal
    if principal is None:
        click.echo("No active session.")
        return

    click.echo(f"Principal: {principal.display_name} (ID: {principal.id})")
    click.echo(f"Role:      {principal.role.value}")
    click.echo(f"Branch:    {principal.branch_name or '-'} ({principal.branch_id or '-'})")


@session_group.command('clear')
@with_appcontext
def clear_session():
    """Log out and clear the persisted slot."""
    store = get_session_store()
    was_authenticated = store.is_authenticated
    store.logout()
    current_app.logger.info("Session slot cleared from CLI")
    if was_authenticated:
        click.echo("PASS Session cleared.")
    else:
        click.echo("PASS No active session; slot cleared.")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(perms_group)
    app.cli.add_command(nav_group)
    app.cli.add_command(session_group)
