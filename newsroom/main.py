#! /usr/bin/env python3
"""
RABKL Newsroom Entry Point
"""
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from loguru import logger

from newsroom.config import LOG_DIR, LOG_FORMAT, NewsroomConfig


def configure_logging(debug: bool = False) -> None:
    """Configure loguru sinks for CLI runs"""
    logger.remove()
    logger.add(
        str(LOG_DIR / "newsroom_{time:YYYY-MM-DD}.log"),
        rotation="1 day",
        retention="30 days",
        level="DEBUG",
        format=LOG_FORMAT,
    )
    logger.add(sys.stderr, level="DEBUG" if debug else "INFO")


@click.group()
@click.option('--debug/--no-debug', default=False, help='Enable debug logging')
@click.pass_context
def cli(ctx, debug):
    """RABKL Newsroom"""
    # Load environment variables from .env file
    load_dotenv()
    configure_logging(debug)
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug


@cli.command('run')
@click.option('--league-id', help='Sleeper league ID (default: SLEEPER_LEAGUE_ID)')
@click.option('--max-events', type=click.IntRange(min=0), help='Maximum articles to write this run')
@click.option('--output-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Directory that holds content/')
def run_newsroom_command(league_id, max_events, output_dir):
    """Turn recent league transactions into articles"""
    from newsroom.newspaper.pipeline import run_newsroom

    try:
        config = NewsroomConfig.from_env(league_id=league_id, max_events=max_events, output_dir=output_dir)
    except ValueError as e:
        raise click.UsageError(str(e))
    logger.info(f"League: {config.league_id}, copy: {'ai' if config.use_ai else 'template'}")

    try:
        results = run_newsroom(config)
    except Exception as e:
        logger.error(f"Newsroom run failed: {e}")
        click.echo(f"✗ Newsroom run failed: {e}")
        sys.exit(1)

    click.echo("=" * 60)
    click.echo(f"Transactions: {results['transactions']:>3}")
    click.echo(f"Events:       {results['events']:>3}")
    click.echo(f"Skipped rounds: {results['skipped_rounds']:>1}")
    click.echo(f"Written:      {len(results['written']):>3}")
    click.echo("=" * 60)

    if not results['written']:
        click.echo("No new events found.")
    for path in results['written']:
        click.echo(f"  {path}")


@cli.command('publish')
@click.argument('paths', nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--message', '-m', default=None, help='Commit message (default: "news update")')
@click.option('--output-dir', type=click.Path(file_okay=False, path_type=Path),
              help='Directory that holds content/; repository paths are relative to it')
def publish_command(paths, message, output_dir):
    """Commit content files to the site repository and redeploy"""
    from newsroom.publishing.github import GitHubPublisher

    config = NewsroomConfig.from_env(output_dir=output_dir)
    if not config.can_publish:
        click.echo("✗ GITHUB_TOKEN and VERCEL_DEPLOY_HOOK must be set to publish")
        sys.exit(1)

    root = config.output_dir.resolve()
    files = []
    for path in paths:
        resolved = path.resolve()
        try:
            repo_path = resolved.relative_to(root).as_posix()
        except ValueError:
            click.echo(f"✗ {path} is outside {root}")
            sys.exit(1)
        files.append({'path': repo_path, 'content': resolved.read_text(encoding='utf-8')})

    publisher = GitHubPublisher(
        token=config.github_token,
        repo=config.github_repo,
        branch=config.github_branch,
        deploy_hook_url=config.deploy_hook_url,
        timeout=config.request_timeout
    )

    try:
        count = publisher.publish(files, message=message)
    except Exception as e:
        logger.error(f"Publish failed: {e}")
        click.echo(f"✗ Publish failed: {e}")
        sys.exit(1)

    click.echo(f"✓ Published {count} files to {config.github_repo}")


@cli.command('check-status')
def check_status():
    """Check the Sleeper league and copy service are reachable"""
    from newsroom.newspaper.openai_client import OpenAIClient
    from newsroom.newspaper.pipeline import create_sleeper_client

    config = NewsroomConfig.from_env()
    logger.info('Checking newsroom status')

    if create_sleeper_client(config).health_check(config.league_id):
        click.echo(f"✓ Sleeper league {config.league_id} reachable")
    else:
        click.echo(f"✗ Sleeper league {config.league_id} not reachable")

    if config.use_ai:
        client = OpenAIClient(config.openai_api_key, base_url=config.openai_base_url)
        if client.health_check():
            click.echo("✓ OpenAI API reachable")
        else:
            click.echo("✗ OpenAI API not reachable")
    else:
        click.echo("ℹ No OPENAI_API_KEY set, template copy will be used")

    if config.can_publish:
        click.echo(f"✓ Publishing configured for {config.github_repo}")
    else:
        click.echo("ℹ Publishing disabled (GITHUB_TOKEN / VERCEL_DEPLOY_HOOK not set)")


@cli.command('serve')
@click.option('--host', default='0.0.0.0', help='Bind address')
@click.option('--port', default=5001, type=int, help='Port')
@click.option('--env', 'env_name', default='development',
              type=click.Choice(['development', 'production', 'testing']),
              help='Flask configuration')
def serve(host, port, env_name):
    """Run the publish endpoint"""
    from newsroom.web import create_app

    app = create_app(env_name)
    app.run(host=host, port=port, debug=(env_name == 'development'))


if __name__ == "__main__":
    cli()
