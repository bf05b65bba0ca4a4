"""Main invoke tasks file. Use `inv --list` to see available tasks."""

from invoke import Collection, Context, task


@task(name="lint")
def lint(ctx: Context) -> None:
    """Run linting (no fixes) - for CI."""
    print("Running ruff check...")
    ctx.run("uv run ruff check")

    print("Running ruff format check...")
    ctx.run("uv run ruff format --check")

    print("All checks passed")


@task(name="format")
def format_and_check(ctx: Context) -> None:
    """Format code using ruff - for local dev."""
    ctx.run("uv run ruff check src tests --fix")
    ctx.run("uv run ruff format src tests")


@task(
    name="test",
    help={"docker": "Also run tests that start real containers (requires Docker)"},
)
def run_tests(ctx: Context, docker: bool = False) -> None:
    """Run tests."""
    marker = "" if docker else ' -m "not docker"'
    ctx.run(f"uv run pytest{marker}")
    print("All tests passed")


@task(
    help={
        "port": "Fixed host port for the database (default: ephemeral)",
        "image": "Container image reference (default: gvenzl/oracle-xe 21 slim)",
    },
)
def oracle(ctx: Context, port: int | None = None, image: str | None = None) -> None:
    """Start an Oracle dev database in the foreground until Ctrl+C."""
    args = ["uv", "run", "devservices-oracle", "start"]
    if port is not None:
        args.extend(["--port", str(port)])
    if image:
        args.extend(["--image", image])
    ctx.run(" ".join(args), pty=True)


ns = Collection(lint, format_and_check, run_tests, oracle)
