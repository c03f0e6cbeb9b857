import asyncio
import logging
import typer
from tortoise import Tortoise
from tortoise.exceptions import IntegrityError

from ..core.config import DATABASE_URL, TORTOISE_ORM_CONFIG
from ..features.auth.security import get_password_hash
from ..features.users.models import Role, User
from ..features.users.schemas import check_password_policy

logger = logging.getLogger(__name__)

app = typer.Typer(name="coffee-shop", help="CLI for managing Coffee Shop application data.")

# Every command opens and closes its own Tortoise connection
class DBConnection:
    async def __aenter__(self):
        await Tortoise.init(config=TORTOISE_ORM_CONFIG)
        await Tortoise.generate_schemas(safe=True)  # creates missing tables only
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()

user_app = typer.Typer(name="users", help="Manage user accounts.")
app.add_typer(user_app)

@user_app.command("create-super")
def create_super_user_command(
    email: str = typer.Option(..., prompt=True, help="Email for the new SUPER user."),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password for the new SUPER user.")
):
    """Creates a SUPER user, the only role allowed to change other users' roles."""
    try:
        check_password_policy(password)
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    asyncio.run(_create_super_user(email, password))

async def _create_super_user(email: str, password: str):
    """Async implementation for creating a SUPER user."""
    async with DBConnection():
        typer.echo(f"Attempting to create SUPER user: {email}...")
        if await User.filter(email=email).exists():
            typer.secho(f"Error: {email} is already registered.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        try:
            user = await User.create(
                email=email,
                hashed_password=get_password_hash(password),
                role=Role.SUPER,
            )
        except IntegrityError as e:
            logger.error(f"Creating SUPER user {email} failed: {e}", exc_info=True)
            typer.secho(f"Error creating SUPER user: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.secho(f"SUPER user '{user.email}' created successfully with ID: {user.id}", fg=typer.colors.GREEN)

@user_app.command("set-role")
def set_role_command(
    email: str = typer.Argument(..., help="Email of the user whose role changes."),
    role: Role = typer.Argument(..., help="New role for the user.", case_sensitive=False),
):
    """Sets the role of an existing user."""
    asyncio.run(_set_role(email, role))

async def _set_role(email: str, role: Role):
    """Async implementation for changing a user's role."""
    async with DBConnection():
        user = await User.get_or_none(email=email)
        if not user:
            typer.secho(f"Error: User with email '{email}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        if user.role == role:
            typer.secho(f"User '{email}' already has role {role.value}.", fg=typer.colors.YELLOW)
            raise typer.Exit(code=0)

        previous = user.role
        user.role = role
        await user.save()
        logger.info(f"Role of {email} changed from {previous.value} to {role.value} from the CLI")
        typer.secho(f"User '{email}' now has role {role.value}.", fg=typer.colors.GREEN)

@user_app.command("list")
def list_users_command():
    """Lists every user with their role."""
    asyncio.run(_list_users())

async def _list_users():
    async with DBConnection():
        users = await User.all().order_by("id")
        if not users:
            typer.echo("No users found.")
            return
        for user in users:
            typer.echo(f"{user.id}\t{user.email}\t{user.role.value}")

@app.command("test-db-connection")
def check_db_connection_command():
    """Connects to the configured database and reports how many accounts it holds."""
    asyncio.run(_check_db_connection())

async def _check_db_connection():
    async with DBConnection():
        typer.echo(f"Connected to {DATABASE_URL}")
        counts = {role: await User.filter(role=role).count() for role in Role}
        summary = ", ".join(f"{count} {role.value}" for role, count in counts.items())
        typer.echo(f"Accounts: {summary}")

if __name__ == "__main__":
    app()
