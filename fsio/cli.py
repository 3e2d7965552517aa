"""Export a Firestore collection to JSON, or import such a JSON file back.

Example usage:

    python -m fsio --serviceAccount=./keyfile.json --dbId=myDb \\
        --export --collection=users --output=users.json
    python -m fsio --serviceAccount=./keyfile.json --dbId=myDb \\
        --import --file=users.json
"""
import logging
from typing import Optional

import typer

from .db import CREDENTIALS_ENV, DEFAULT_DATABASE, init_client
from .errors import ConfigurationError, FirestoreIOError
from .exporter import export_to_file
from .importer import import_from_file

LOGGER = logging.getLogger(__name__)

USAGE = (
    "No valid command specified. Use --export or --import.\n\n"
    "  --export --collection=<name> --output=<file>\n"
    "  --import --file=<jsonPath>"
)

app = typer.Typer(add_completion=False)


def _fail(message: str):
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _check_flags(export: bool, import_: bool, collection, output, file):
    if export and import_:
        raise ConfigurationError("Use either --export or --import, not both.")
    if export and (not collection or not output):
        raise ConfigurationError(
            "Error: --collection=<name> and --output=<file> are required for export.")
    if import_ and not file:
        raise ConfigurationError(
            "Error: --file=<jsonPath> is required for import.")


@app.command()
def run(
    service_account: str = typer.Option(
        "", "--serviceAccount", envvar=CREDENTIALS_ENV,
        help="Path to the service account key file."),
    db_id: str = typer.Option(
        DEFAULT_DATABASE, "--dbId", help="Firestore database ID."),
    export: bool = typer.Option(
        False, "--export", help="Export a collection to a JSON file."),
    import_: bool = typer.Option(
        False, "--import", help="Import a JSON file into Firestore."),
    collection: Optional[str] = typer.Option(
        None, "--collection", help="Collection to export."),
    output: Optional[str] = typer.Option(
        None, "--output", help="File the export is written to."),
    file: Optional[str] = typer.Option(
        None, "--file", help="JSON file to import."),
    strict: bool = typer.Option(
        False, "--strict",
        help="Use the __fields__/__subcollections__ file format."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Log the writes an import would do."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                        level=logging.DEBUG if verbose else logging.INFO)
    if not export and not import_:
        _fail(USAGE)
    try:
        _check_flags(export, import_, collection, output, file)
        # A dry-run import never touches the store.
        if import_ and dry_run:
            db = None
        else:
            db = init_client(service_account, db_id)
        if export:
            export_to_file(db, collection, output, strict=strict)
        else:
            import_from_file(db, file, strict=strict, dry_run=dry_run)
    except (FirestoreIOError, OSError) as e:
        LOGGER.debug("Aborted", exc_info=True)
        _fail(str(e))


def main():
    app()


if __name__ == '__main__':
    main()
