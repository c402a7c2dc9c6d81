"""Showcase examples for plumb."""

import logging

from plumb import edge, graph, node, subgraph


def hero_example():
    """Hero example: clusters, labels and a back edge in one compact graph."""
    with graph(label="Web app", rankdir="TB", filename="docs/hero"):
        user = node("user", label="User")

        with subgraph(label="Our WebApp", style="dashed"):
            web = node("web", label="Presentation")
            logic = node("logic", label="Business")
            persistence = node("persistence", label="Persistence")

        with subgraph(label="Storage", style="dotted"):
            db = node("db", label="PostgreSQL")
            cache = node("cache", label="Redis")

        user >> web
        web >> logic
        logic >> persistence
        persistence >> db | "SQL"
        persistence >> cache | "get"
        cache >> logic | "hit"


def example_pipeline():
    """Left-to-right ML data pipeline."""
    with graph(label="Data pipeline", rankdir="LR", filename="docs/example_pipeline"):
        with subgraph(label="Sources"):
            api = node("api", label="APIs")
            dbs = node("db", label="Databases")
            files = node("files", label="Files")

        ingest = node("ingest", label="Ingest")
        lake = node("lake", label="Data lake")

        with subgraph(label="ML", style="dashed"):
            train = node("train", label="Training")
            serve = node("serve", label="Serving")

        for source in (api, dbs, files):
            source >> ingest

        ingest >> lake | "raw"
        lake >> train
        train >> serve | "model"
        edge(serve, lake, label="logs")


def example_event_driven():
    """Producers and consumers around an event bus, drawn bottom to top."""
    with graph(label="Events", rankdir="BT", filename="docs/example_event_driven"):
        bus = node("bus", label="Event bus")

        with subgraph(label="Producers"):
            orders = node("orders", label="Orders")
            payments = node("payments", label="Payments")

        with subgraph(label="Consumers"):
            mail = node("mail", label="Mailer")
            stats = node("stats", label="Stats")

        orders >> bus | "pub"
        payments >> bus | "pub"
        bus >> mail | "sub"
        bus >> stats | "sub"


if __name__ == "__main__":
    import os

    logging.basicConfig(level=logging.INFO)
    os.makedirs("docs", exist_ok=True)

    print("Generating hero example...")
    hero_example()

    print("Generating data pipeline example...")
    example_pipeline()

    print("Generating event-driven architecture...")
    example_event_driven()

    print("\nAll examples generated in docs/")
