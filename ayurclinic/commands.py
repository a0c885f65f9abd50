"""
Flask CLI helpers:
- flask create-db: create tables using the configured database
- flask drop-db: drop all tables (use with caution)
- flask seed-admin: create the first admin account
"""
import click
from flask import Flask

from ayurclinic.extensions import db


def register_cli(app: Flask) -> None:

    @app.cli.command("create-db")
    def create_db_command():
        """Create database tables if they do not exist."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("drop-db")
    def drop_db_command():
        """Drop all database tables. This is destructive."""
        db.drop_all()
        click.echo("Database tables dropped.")

    @app.cli.command("seed-admin")
    @click.option("--email", default="admin@ayurclinic.com", show_default=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--name", default="Clinic Admin", show_default=True)
    def seed_admin_command(email, password, name):
        """Create an admin account if the email is not taken."""
        from ayurclinic.seeds import create_admin

        user, created = create_admin(email=email, password=password, name=name)
        if created:
            click.echo(f"Admin {user.email} created.")
        else:
            click.echo(f"User {user.email} already exists ({user.role.value}).")
