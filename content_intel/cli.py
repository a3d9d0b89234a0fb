"""Command line interface for the content intelligence engine."""

import logging
import sys
from pathlib import Path
from typing import Any

import click
import orjson

from .config import get_settings, validate_config
from .engine import classify_location, plan_placements, rank_related
from .logging import PerformanceLogger, get_logger, log_error, setup_logging
from .models import Article, PlacementConfig
from .processing.gazetteer import load_gazetteer
from .processing.geo import location_keywords
from .processing.related import ScoringWeights, SmartRelatedOptions, smart_related
from .ui import ConsoleUI

logger = get_logger(__name__)


def _load_articles(path: Path) -> list[Article]:
    """Read a JSON list of article records (or ``{"articles": [...]}``)."""
    data = orjson.loads(path.read_bytes())
    if isinstance(data, dict):
        data = data.get("articles", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of articles")
    return [Article.from_dict(item) for item in data]


def _emit_json(payload: Any) -> None:
    click.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())


def _fail(ui: ConsoleUI, error: Exception, context: str) -> None:
    logger.error("CLI execution failed", **log_error(error, context=context))
    ui.error(str(error))
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--log-level", default="ERROR", help="Log level")
@click.option("--verbose", is_flag=True, help="Show engine debug logs")
@click.option(
    "--validate-config",
    "validate_config_flag",
    is_flag=True,
    help="Validate configuration and exit",
)
@click.pass_context
def cli(ctx, log_level, verbose, validate_config_flag):
    """Content intelligence tools: related articles, geo tagging, ad placement."""
    actual_log_level = "DEBUG" if verbose else log_level
    setup_logging(log_level=actual_log_level, json_logging=False)
    logging.getLogger().setLevel(getattr(logging, actual_log_level.upper(), logging.ERROR))

    ui = ConsoleUI(verbose=verbose)
    ctx.obj = ui

    if validate_config_flag:
        if validate_config(get_settings()):
            ui.success("Configuration is valid")
            sys.exit(0)
        ui.error("Configuration validation failed")
        sys.exit(1)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("articles_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target_id")
@click.option("--limit", type=int, help="Maximum related articles (default from settings)")
@click.option("--smart", is_flag=True, help="Apply author/recency preferences to the ranking")
@click.option("--prefer-author", is_flag=True, help="With --smart, list same-author articles first")
@click.option("--exclude-category", multiple=True, help="With --smart, drop candidates in this category")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_obj
def related(ui, articles_file, target_id, limit, smart, prefer_author, exclude_category, as_json):
    """Rank articles in ARTICLES_FILE by relatedness to TARGET_ID."""
    try:
        settings = get_settings()
        weights = ScoringWeights.from_settings(settings)
        limit = settings.related_limit if limit is None else limit

        with PerformanceLogger("rank_related", logger):
            articles = _load_articles(articles_file)
            by_id = {article.id: article for article in articles}
            if target_id not in by_id:
                raise click.BadParameter(f"No article with id {target_id!r}", param_hint="TARGET_ID")
            target = by_id[target_id]

            if smart:
                options = SmartRelatedOptions(
                    prefer_same_author=prefer_author,
                    exclude_categories=tuple(exclude_category),
                    limit=limit,
                )
                scores = smart_related(target, articles, options, weights)
            else:
                scores = rank_related(target, articles, limit, weights)

        ui.verbose_log(f"Scored {len(articles) - 1} candidates for {target_id}")
        if as_json:
            _emit_json(scores)
        else:
            ui.show_related(target, scores, by_id)

    except click.ClickException:
        raise
    except Exception as e:
        _fail(ui, e, "related")


@cli.command()
@click.option("--title", default="", help="Article title")
@click.option("--content", default="", help="Article body text")
@click.option("--content-file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Read the article body from a file")
@click.option("--category", default="", help="Primary category name")
@click.option("--tag", "tags", multiple=True, help="Tag slug (repeatable)")
@click.option("--keywords", is_flag=True, help="Also print SEO location keywords")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a panel")
@click.pass_obj
def locate(ui, title, content, content_file, category, tags, keywords, as_json):
    """Classify which country, city and region an article is about."""
    try:
        gazetteer = load_gazetteer(get_settings().gazetteer_path)
        if content_file:
            content = content_file.read_text(encoding="utf-8")

        location = classify_location(title, content, category, list(tags), gazetteer)
        seo_keywords = location_keywords(location, category, gazetteer) if keywords else None

        if as_json:
            payload: dict[str, Any] = {"location": location}
            if seo_keywords is not None:
                payload["keywords"] = seo_keywords
            _emit_json(payload)
        else:
            ui.show_location(location)
            if seo_keywords:
                ui.info(", ".join(seo_keywords))

    except Exception as e:
        _fail(ui, e, "locate")


@cli.command()
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--min-paragraphs", type=int, help="Paragraphs before the first placement")
@click.option("--min-words", type=int, help="Words between placements")
@click.option("--max-placements", type=int, help="Maximum placements")
@click.option(
    "--prefer",
    multiple=True,
    type=click.Choice(["early", "middle", "late"]),
    help="Preferred reading position (repeatable; default all)",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_obj
def placements(ui, html_file, min_paragraphs, min_words, max_placements, prefer, as_json):
    """Plan ad placements for the article body in HTML_FILE."""
    try:
        settings = get_settings()
        overrides = {
            "min_paragraphs_before_first": min_paragraphs,
            "min_words_between_placements": min_words,
            "max_placements": max_placements,
            "preferred_positions": list(prefer) or None,
        }
        values = PlacementConfig.from_settings(settings).model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        config = PlacementConfig.model_validate(values)

        with PerformanceLogger("plan_placements", logger):
            result = plan_placements(html_file.read_text(encoding="utf-8"), config)

        if as_json:
            _emit_json(result)
        else:
            ui.show_placements(result)

    except Exception as e:
        _fail(ui, e, "placements")


if __name__ == "__main__":
    cli()
