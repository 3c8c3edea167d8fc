"""Click CLI for hr-ranker.

Commands:
    import   -- Load a candidate .csv/.xlsx file and score it.
    score    -- Recalculate every candidate's score with new weights.
    show     -- Print the current ranking and summary statistics.
    edit     -- Change one candidate and rescore everyone.
    remove   -- Delete one candidate and rescore the rest.
    export   -- Write the ranking to a .csv or .xlsx file.
    report   -- Render the HTML ranking report.
    template -- Write a candidate .csv or .xlsx template.
    clear    -- Delete all stored candidates.
    pipeline -- Invoke the full pypyr pipeline.
"""

from __future__ import annotations

import os
import logging
import pathlib

import click
from dotenv import load_dotenv

from hr_ranker import DB_ENV_VAR, resolve_db_path

logger = logging.getLogger("hr_ranker.cli")


def _ensure_db_dir(db_path: str) -> None:
    """Create parent directory for the database file if it does not exist."""
    parent = os.path.dirname(db_path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def _open_db(ctx: click.Context):
    """Open and initialise the database named in the click context."""
    from hr_ranker.db.manager import get_connection, init_db

    db_path = ctx.obj["db_path"]
    _ensure_db_dir(db_path)
    conn = get_connection(db_path)
    init_db(conn)
    return conn


def _fail(message: str) -> None:
    """Print *message* in red and exit with status 1."""
    click.echo(click.style(message, fg="red"))
    raise SystemExit(1)


def _print_ranking(entries: list[tuple[int, str, float | None]]) -> None:
    """Print ``(rank, name, score)`` entries as a fixed-width table."""
    from hr_ranker.reporting.stats import status_label

    separator = "-" * 62
    click.echo(separator)
    click.echo(f"  {'#':<4} {'Name':<30} {'Score':>7}  {'Status':<16}")
    click.echo(f"  {'---':<4} {'---':<30} {'---':>7}  {'---':<16}")
    for rank, name, score in entries:
        # Truncate long names
        if len(name) > 28:
            name = name[:25] + "..."
        shown = f"{score:.3f}" if score is not None else "-"
        click.echo(f"  {rank:<4} {name:<30} {shown:>7}  {status_label(score):<16}")
    click.echo(separator)


@click.group()
@click.option(
    "--db",
    default=None,
    envvar=DB_ENV_VAR,
    help="Path to the SQLite database file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, db: str | None, verbose: bool) -> None:
    """hr-ranker: rank job candidates by closeness to the ideal profile."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = resolve_db_path(db)


@main.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_(ctx: click.Context, path: str) -> None:
    """Replace the candidate set with PATH (.csv or .xlsx) and score it."""
    from hr_ranker.ingest.loader import CandidateValidationError, load_candidates
    from hr_ranker.scoring.errors import ScoringError
    from hr_ranker.service import import_candidates

    try:
        records = load_candidates(path)
    except CandidateValidationError as exc:
        click.echo(click.style("Data validation failed:", fg="red"))
        for error in exc.errors:
            click.echo(f"  {error}")
        raise SystemExit(1)

    conn = _open_db(ctx)
    try:
        results = import_candidates(conn, records)
    except ScoringError as exc:
        _fail(f"Scoring failed: {exc}")
    finally:
        conn.close()

    click.echo(
        click.style(f"Imported {len(results)} candidates.", fg="green")
    )
    _print_ranking([(r.rank, r.name, r.score) for r in results])


@main.command()
@click.option("--experience", default=25.0, show_default=True, type=float,
              help="Weight for years of experience (benefit).")
@click.option("--education", default=20.0, show_default=True, type=float,
              help="Weight for education level (benefit).")
@click.option("--interview", default=40.0, show_default=True, type=float,
              help="Weight for interview score (benefit).")
@click.option("--age", default=15.0, show_default=True, type=float,
              help="Weight for age (cost).")
@click.pass_context
def score(
    ctx: click.Context,
    experience: float,
    education: float,
    interview: float,
    age: float,
) -> None:
    """Recalculate all scores with new weights (must sum to 100)."""
    from hr_ranker.scoring.errors import InvalidWeightError, ScoringError
    from hr_ranker.scoring.models import WeightVector
    from hr_ranker.service import recalculate, validate_weight_total

    try:
        weights = WeightVector(experience, education, interview, age)
        validate_weight_total(weights)
    except InvalidWeightError as exc:
        _fail(f"Invalid weights: {exc}")

    conn = _open_db(ctx)
    try:
        results = recalculate(conn, weights)
    except ScoringError as exc:
        _fail(f"Scoring failed: {exc}")
    finally:
        conn.close()

    if not results:
        click.echo(click.style("No candidates to score.", fg="yellow"))
        return

    click.echo(
        click.style(f"Recalculated {len(results)} candidates.", fg="green")
    )
    _print_ranking([(r.rank, r.name, r.score) for r in results])


@main.command()
@click.argument("candidate_id", type=int)
@click.option("--name", default=None, help="New candidate name.")
@click.option("--experience", default=None, type=float, help="Years of experience.")
@click.option("--education", default=None, type=float, help="Education level (1-5).")
@click.option("--interview", default=None, type=float, help="Interview score (0-100).")
@click.option("--age", default=None, type=float, help="Age (18-65).")
@click.pass_context
def edit(ctx: click.Context, candidate_id: int, **changes) -> None:
    """Change CANDIDATE_ID's values and rescore every candidate."""
    from hr_ranker.ingest.loader import CandidateValidationError
    from hr_ranker.scoring.errors import ScoringError
    from hr_ranker.service import update_candidate

    fields = {key: value for key, value in changes.items() if value is not None}
    if not fields:
        _fail("Nothing to change: pass at least one of --name, --experience, "
              "--education, --interview, --age.")

    conn = _open_db(ctx)
    try:
        results = update_candidate(conn, candidate_id, **fields)
    except CandidateValidationError as exc:
        _fail("; ".join(exc.errors))
    except ScoringError as exc:
        _fail(f"Scoring failed: {exc}")
    finally:
        conn.close()

    if results is None:
        _fail(f"No candidate with id {candidate_id}.")

    click.echo(click.style(f"Updated candidate {candidate_id}.", fg="green"))
    _print_ranking([(r.rank, r.name, r.score) for r in results])


@main.command()
@click.argument("candidate_id", type=int)
@click.pass_context
def remove(ctx: click.Context, candidate_id: int) -> None:
    """Delete CANDIDATE_ID and rescore the remaining candidates."""
    from hr_ranker.scoring.errors import ScoringError
    from hr_ranker.service import delete_candidate

    conn = _open_db(ctx)
    try:
        results = delete_candidate(conn, candidate_id)
    except ScoringError as exc:
        _fail(f"Scoring failed: {exc}")
    finally:
        conn.close()

    if results is None:
        _fail(f"No candidate with id {candidate_id}.")

    click.echo(click.style(f"Removed candidate {candidate_id}.", fg="green"))
    if results:
        _print_ranking([(r.rank, r.name, r.score) for r in results])


@main.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the stored ranking and summary statistics."""
    from hr_ranker.db.manager import get_all_candidates
    from hr_ranker.reporting.stats import candidate_stats

    conn = _open_db(ctx)
    rows = get_all_candidates(conn)
    conn.close()

    if not rows:
        click.echo(click.style("No candidates stored.", fg="yellow"))
        return

    _print_ranking([
        (idx, row["name"], row["final_score"])
        for idx, row in enumerate(rows, start=1)
    ])

    stats = candidate_stats(row["final_score"] for row in rows)
    click.echo(
        f"Total: {stats['total']} | "
        + click.style(f"Recommended: {stats['recommended']}", fg="green")
        + f" | Average: {stats['average_score']:.3f}"
        + f" | Top: {stats['top_score']:.3f}"
    )


@main.command()
@click.argument("output", type=click.Path(dir_okay=False),
                default="candidate-results.xlsx")
@click.pass_context
def export(ctx: click.Context, output: str) -> None:
    """Write the ranking to OUTPUT (.csv or .xlsx)."""
    from hr_ranker.reporting.exporter import export_results
    from hr_ranker.scoring.errors import EmptyInputError
    from hr_ranker.spreadsheet import UnsupportedFormatError

    conn = _open_db(ctx)
    try:
        count = export_results(conn, output)
    except (EmptyInputError, UnsupportedFormatError) as exc:
        _fail(str(exc))
    finally:
        conn.close()

    click.echo(click.style(f"Exported {count} candidates to {output}.", fg="green"))


@main.command()
@click.option(
    "--output",
    default="candidate-ranking.html",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Where to write the HTML report.",
)
@click.pass_context
def report(ctx: click.Context, output: str) -> None:
    """Render the HTML ranking report."""
    from hr_ranker.reporting.composer import compose_ranking_report
    from hr_ranker.scoring.errors import EmptyInputError

    conn = _open_db(ctx)
    try:
        report_data = compose_ranking_report(conn)
    except EmptyInputError as exc:
        _fail(str(exc))
    finally:
        conn.close()

    pathlib.Path(output).write_text(report_data["html_body"], encoding="utf-8")
    click.echo(report_data["subject"])
    click.echo(click.style(f"Report written to {output}.", fg="green"))


@main.command()
@click.argument("output", type=click.Path(dir_okay=False),
                default="candidate-template.xlsx")
def template(output: str) -> None:
    """Write a candidate template (.csv or .xlsx) to OUTPUT."""
    from hr_ranker.ingest.loader import write_template
    from hr_ranker.spreadsheet import UnsupportedFormatError

    try:
        write_template(output)
    except UnsupportedFormatError as exc:
        _fail(str(exc))
    click.echo(click.style(f"Template written to {output}.", fg="green"))


@main.command()
@click.confirmation_option(prompt="Delete all stored candidates?")
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Delete all stored candidates."""
    from hr_ranker.db.manager import delete_all_candidates, get_candidate_count

    conn = _open_db(ctx)
    count = get_candidate_count(conn)
    delete_all_candidates(conn)
    conn.close()
    click.echo(click.style(f"Deleted {count} candidates.", fg="green"))


@main.command()
@click.option(
    "--candidates",
    "candidates_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Candidate .csv/.xlsx to load first; omit to rescore stored candidates.",
)
@click.option(
    "--report-path",
    default="candidate-ranking.html",
    show_default=True,
    help="Where the pipeline writes the HTML report.",
)
@click.pass_context
def pipeline(ctx: click.Context, candidates_file: str | None, report_path: str) -> None:
    """Run the full pypyr ranking pipeline."""
    from pypyr import pipelinerunner
    from hr_ranker import PACKAGE_DIR

    db_path = ctx.obj["db_path"]
    _ensure_db_dir(db_path)

    pipeline_path = str(PACKAGE_DIR / "pipelines" / "rank_candidates")
    click.echo(click.style("Running pipeline: rank_candidates", fg="cyan"))

    dict_in = {"db_path": db_path, "report_path": report_path}
    if candidates_file:
        dict_in["candidates_file"] = candidates_file

    try:
        pipelinerunner.run(pipeline_name=pipeline_path, dict_in=dict_in)
        click.echo(
            click.style("Pipeline 'rank_candidates' completed.", fg="green")
        )
    except Exception as exc:
        logger.error("Pipeline failed: %s", exc)
        _fail(f"Pipeline failed: {exc}")
