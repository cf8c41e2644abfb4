import click

from portfolio.data import DataAccessClient
from portfolio.domain.sections import DEFAULT_SECTION_ORDER
from portfolio.extensions import db
from portfolio.models.user import User


def seed_sections(client):
    """
    Insert any known section missing from the registry, appended after the
    existing ones. Returns the names that were added.
    """
    existing = client.select("sections", order_by="order_index")
    names = {row["name"] for row in existing}
    next_index = max((row["order_index"] for row in existing), default=-1) + 1

    added = []
    for name in DEFAULT_SECTION_ORDER:
        if name in names:
            continue
        client.insert("sections", {"name": name, "is_visible": True, "order_index": next_index})
        next_index += 1
        added.append(name)
    return added


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use migrations in production)."""
        db.create_all()
        click.echo("Database tables created")

    @app.cli.command("seed-sections")
    def seed_sections_command():
        """Seed the public page sections."""
        added = seed_sections(DataAccessClient(db.session))
        if added:
            click.echo(f"Seeded sections: {', '.join(added)}")
        else:
            click.echo("All sections already present")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.password_option()
    def create_admin(email, password):
        """Create an admin account, or promote an existing one."""
        user = User.query.filter_by(email=email).first()
        if user is None:
            user = User()
            user.email = email
            db.session.add(user)

        user.role = "admin"
        user.is_active = True
        user.set_password(password)
        db.session.commit()
        click.echo(f"Admin {email} ready")
