"""Tag commands."""

import click
from finledger.cli.error_handling import handle_domain_error
from finledger.domain.errors import DomainError
from finledger.domain.tag import TagService


@click.group()
def tag_group():
    """Manage transaction tags."""
    pass


@tag_group.command("create")
@click.argument("name")
@click.option("--color", help="Display color, e.g. #ff8800")
@click.pass_context
def create_tag(ctx, name: str, color: str | None):
    """Create a tag."""
    service = TagService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])
    try:
        tag_id = service.create_tag(name, color=color)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created tag '{name}' (ID: {tag_id})")


@tag_group.command("list")
@click.pass_context
def list_tags(ctx):
    """List tags."""
    tags = TagService(ctx.obj["db"], owner_id=ctx.obj["owner_id"]).list_tags()
    if not tags:
        click.echo("No tags found.")
        return
    for tag in tags:
        suffix = f" ({tag.color})" if tag.color else ""
        click.echo(f"ID: {tag.id:3d} | {tag.name}{suffix}")


def register_commands(cli):
    """Register tag commands with main CLI."""
    cli.add_command(tag_group, name="tag")
