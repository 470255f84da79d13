import logging

import click
from flask import Flask, jsonify
from config.config import Config
from extensions import db, login_manager, migrate

# Route Imports
from routes.marks_routes import marks_bp
from routes.component_routes import components_bp

# Model Imports (registers every table with the metadata used by migrations)
from models import (
    Branch, Role, User, Student, Subject, InternalExamBlueprint, InternalSubQuestion,
    StudentSubQuestionMark, StudentInternalTotal, SubjectComponentConfig,
    StudentComponentMark, StudentOverallTotal
)
from services.component_totals import fill_overall_totals
from services.internal_totals import fill_internal_totals
from services.marks_store import MarksStore
from utils.seed_data import run_seed


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def register_commands(app):
    @app.cli.command("fill-internal-totals")
    @click.option("--subject-id", type=int, default=None, help="Only this subject.")
    @click.option("--cie-no", type=int, default=None, help="Only this CIE number.")
    @click.pass_context
    def fill_internal_totals_command(ctx, subject_id, cie_no):
        """Recompute student_internal_totals from sub-question marks."""
        report = fill_internal_totals(MarksStore(db.session), subject_id=subject_id, cie_no=cie_no)
        click.echo(f"Internal totals: {report.summary()}")
        if not report.ok:
            ctx.exit(1)

    @app.cli.command("fill-overall-totals")
    @click.option("--subject-id", type=int, default=None, help="Only this subject.")
    @click.pass_context
    def fill_overall_totals_command(ctx, subject_id):
        """Recompute student_overall_totals from CIE totals and component marks."""
        report = fill_overall_totals(MarksStore(db.session), subject_id=subject_id)
        click.echo(f"Overall totals: {report.summary()}")
        if not report.ok:
            ctx.exit(1)

    @app.cli.command("seed")
    def seed_command():
        """Create the default roles and branches."""
        created = run_seed()
        click.echo(f"Seed complete, {created} rows created")


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)

    # Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"error": "Authentication required"}), 401

    # Register Blueprints
    app.register_blueprint(marks_bp)
    app.register_blueprint(components_bp)

    register_commands(app)

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000, debug=True)
