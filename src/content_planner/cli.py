"""Command line interface for the content planner."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from .config import PlannerConfig, load_config
from .logging import configure_logging, get_logger
from .pipelines import plan as run_plan
from .pipelines import rank_graph
from .utils import GraphDocument, load_graph_document, save_json

LOGGER = get_logger(__name__)

GRAPH_ARGUMENT = typer.Argument(..., help="Graph document (JSON or YAML).")
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to planner configuration.",
)
SEED_OPTION = typer.Option(
    None,
    "--seed",
    help="Random seed overriding the configuration.",
)
OUTPUT_OPTION = typer.Option(
    None,
    "--output",
    help="Optional path to write the JSON result instead of printing it.",
)
LOG_LEVEL_OPTION = typer.Option(
    "warning",
    "--log-level",
    help="Logging level name.",
)
MEANINGS_OPTION = typer.Option(
    True,
    "--meanings/--no-meanings",
    help="Seed vertex weights with a ranking of the document's meanings.",
)
START_FROM_VERBS_OPTION = typer.Option(
    None,
    "--start-from-verbs/--start-anywhere",
    help="Only start extraction from finite verbs (overrides the configuration).",
)

app = typer.Typer(
    help="Rank semantic graphs and select non-redundant content patterns."
)


def _load(config_path: Optional[Path], seed: Optional[int], start_from_verbs: Optional[bool] = None) -> PlannerConfig:
    overrides: list[dict[str, Any]] = []
    if seed is not None:
        overrides.append({"seed": seed})
    if start_from_verbs is not None:
        overrides.append({"extraction": {"start_from_verbs": start_from_verbs}})
    return load_config(config_path, overrides)


def _meaning_inputs(document: GraphDocument, use_meanings: bool) -> dict[str, Any]:
    if not use_meanings or not document.meaning_weights:
        return {}
    return {"candidates": document.candidates, "meaning_bias": document.meaning_bias}


def _emit(payload: Any, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(json.dumps(payload, indent=2))
        return
    save_json(Path(output), payload)
    LOGGER.info("Wrote result to %s", output)


@app.command()
def rank(
    graph_path: Path = GRAPH_ARGUMENT,
    config_path: Optional[Path] = CONFIG_OPTION,
    seed: Optional[int] = SEED_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    meanings: bool = MEANINGS_OPTION,
) -> None:
    """Print the biased PageRank weight of every vertex."""

    configure_logging(log_level)
    config = _load(config_path, seed)
    document = load_graph_document(graph_path)
    weights = rank_graph(document.graph, document.similarity, config, **_meaning_inputs(document, meanings))
    ordered = sorted(weights.items(), key=lambda item: (-item[1], item[0]))
    _emit({vertex: weight for vertex, weight in ordered}, output)


@app.command()
def plan(
    graph_path: Path = GRAPH_ARGUMENT,
    config_path: Optional[Path] = CONFIG_OPTION,
    seed: Optional[int] = SEED_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    meanings: bool = MEANINGS_OPTION,
    start_from_verbs: Optional[bool] = START_FROM_VERBS_OPTION,
) -> None:
    """Rank, extract and de-duplicate subgraphs of a graph document."""

    configure_logging(log_level)
    config = _load(config_path, seed, start_from_verbs)
    document = load_graph_document(graph_path)
    result = run_plan(document.graph, document.similarity, config, **_meaning_inputs(document, meanings))
    _emit(result.to_dict(), output)


if __name__ == "__main__":
    app()
