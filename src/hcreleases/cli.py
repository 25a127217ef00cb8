import typer
from typing import Optional
from rich.console import Console
from rich.table import Table
import requests

from .client import ReleasesClient
from .errors import ReleasesError
from .models import ReleaseOptions

app = typer.Typer(help="Query the HashiCorp Releases API")
console = Console()

client = ReleasesClient.from_env()


@app.callback()
def main(url: Optional[str] = typer.Option(None, "--url", help="Releases API base URL (overrides RELEASES_URL)")):
    global client
    if url:
        client.close()
        client = ReleasesClient(base_url=url)


@app.command()
def products():
    """List all products."""
    try:
        names = client.get_products()
    except (ReleasesError, requests.RequestException) as e:
        console.print(f"[red]Error fetching products: {e}[/red]")
        raise typer.Exit(code=1)

    for name in sorted(names):
        console.print(name)


@app.command("list")
def list_releases(
    product: str = typer.Argument(..., help="Product name, e.g. terraform"),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of releases to return (max 20)"),
    after: str = typer.Option("", "--after", help="Only releases created before this RFC3339 timestamp"),
    license_class: str = typer.Option("", "--license-class", "-l", help="enterprise or oss"),
):
    """List recent releases of a product, newest first."""
    options = ReleaseOptions(limit=limit, after=after, license_class=license_class)
    try:
        releases = client.get_releases(product, options)
    except (ReleasesError, requests.RequestException) as e:
        console.print(f"[red]Error fetching releases: {e}[/red]")
        raise typer.Exit(code=1)

    if not releases:
        console.print("No releases found.")
        return

    table = Table(title=f"{product} releases")
    table.add_column("Version", style="green")
    table.add_column("License", style="yellow")
    table.add_column("Status", style="cyan")
    table.add_column("Created", style="magenta")

    for release in releases:
        version = release.version + (" (pre)" if release.is_prerelease else "")
        table.add_row(version, release.license_class, release.status.state, release.timestamp_created)

    console.print(table)


@app.command()
def show(
    product: str = typer.Argument(..., help="Product name, e.g. vault"),
    version: str = typer.Argument(..., help="Release version, e.g. 1.2.3"),
    host: bool = typer.Option(False, "--host", help="Only show the build for this machine"),
):
    """Show metadata and builds for a single release."""
    try:
        release = client.get_release_metadata(product, version)
    except (ReleasesError, requests.RequestException) as e:
        console.print(f"[red]Error fetching release: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]{release.name} {release.version}[/bold] ({release.license_class})")
    console.print(f"Status: {release.status.state}")
    if release.is_withdrawn and release.status.message:
        console.print(f"[red]Withdrawn: {release.status.message}[/red]")
    if release.url_changelog:
        console.print(f"Changelog: {release.url_changelog}")
    if release.url_shasums:
        console.print(f"Checksums: {release.url_shasums}")

    builds = release.builds
    if host:
        build = release.build_for_host()
        if build is None:
            console.print("[yellow]No build for this platform.[/yellow]")
            raise typer.Exit(code=1)
        builds = (build,)

    table = Table(title="Builds")
    table.add_column("OS", style="cyan")
    table.add_column("Arch", style="yellow")
    table.add_column("URL", style="green")

    for build in builds:
        arch = build.arch + (" (unsupported)" if build.unsupported else "")
        table.add_row(build.os, arch, build.url)

    console.print(table)


if __name__ == "__main__":
    app()
