import click
from flask import current_app
from chemistry.extensions import db
from chemistry.models.user import ROLES, User


def register_commands(app):
    @app.cli.command("create-user")
    @click.argument("email")
    @click.password_option()
    @click.option("--role", type=click.Choice(ROLES), default="editor", show_default=True)
    def create_user(email, password, role):
        """Create an account that can sign in to the editing API."""
        email = email.strip().lower()

        if User.query.filter_by(email=email).first():
            raise click.ClickException(f"User {email} already exists")

        user = User()
        user.email = email
        user.role = role
        user.is_active = True
        user.set_password(password)

        db.session.add(user)
        db.session.commit()

        current_app.logger.info("Created %s user %s", role, email)
        click.echo(f"Created {role} {email}")
