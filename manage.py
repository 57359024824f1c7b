from greencert.app import create_app, db

from flask_migrate import Migrate
from flask.cli import FlaskGroup
import click
from flask import current_app
from greencert.models import Office
from greencert.services.offices import recompute_certification
from greencert.shared.certificates import CertificateError, render_certificate
from greencert.shared.storage import write_atomic
from greencert.scripts.gen_template import write_blank_template


migrate = Migrate()


def create_greencert_app():
    app = create_app()
    migrate.init_app(app, db)
    return app


cli = FlaskGroup(create_app=create_greencert_app)


@cli.command("gen_cert")
@click.option("--office", "office_id", required=True, type=int)
@click.option("--out", "out_path", default=None, help="Output PDF path")
def gen_cert(office_id: int, out_path: str | None):
    """Render the certificate for an office to disk."""
    office = db.session.get(Office, office_id)
    try:
        rendered = render_certificate(office)
    except CertificateError as exc:
        click.echo(str(exc), err=True)
        raise SystemExit(1)
    path = out_path or rendered.filename
    write_atomic(path, rendered.data)
    click.echo(path)


@cli.command("recompute_scores")
@click.option("--dry-run", is_flag=True, help="Report changes without saving")
def recompute_scores(dry_run: bool):
    """Re-derive completion percent and tier for every office."""
    total = changed = 0
    for office in db.session.query(Office).order_by(Office.id).all():
        total += 1
        before = (office.completion_percent, office.certification_tier)
        result = recompute_certification(office)
        if before != (result.percent, result.tier.value):
            changed += 1
            click.echo(
                f"{office.id} {office.office_name}: {before[0]}% {before[1]!r} "
                f"-> {result.percent}% {result.tier.value!r}"
            )
    if dry_run:
        db.session.rollback()
    else:
        db.session.commit()
    summary = f"scanned={total} changed={changed} dry_run={dry_run}"
    click.echo(summary)
    current_app.logger.info("[OFFICE-RECOMPUTE] %s", summary)


@cli.command("gen_template")
@click.option("--out", "out_path", required=True, help="Output PDF path")
def gen_template(out_path: str):
    """Write a blank certificate template."""
    click.echo(write_blank_template(out_path))


if __name__ == "__main__":
    cli()
