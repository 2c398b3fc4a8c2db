"""
BFS Routing - Flask JSON adapter.

Exposes the graph store and the search engine to a presentation layer:
- Graph: list, add/remove nodes and edges, neighbor queries
- Search: one-shot search with the full event log
- Stream: server-sent events, one per traversal step, in order
"""

from __future__ import annotations

import json
import logging

from flask import Flask, Response, jsonify, request, stream_with_context

from src.benchmark import summarize
from src.config import API_HOST, API_PORT, LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL, STREAM_MAX_DELAY_SECONDS
from src.errors import DuplicateNodeError, GraphBusyError, GraphError, UnknownNodeError
from src.graph import GraphStore, default_graph
from src.search import BackgroundSearch, EventBus, search

logger = logging.getLogger(__name__)


def create_app(store: GraphStore | None = None, search_events: EventBus | None = None) -> Flask:
    """
    Build the Flask app around a graph.

    Args:
        store: Graph to serve; defaults to the six-node demo graph
        search_events: Bus that sees every event of every search the app
            runs, one-shot and streamed alike
    """
    app = Flask(__name__)
    graph = store if store is not None else default_graph()
    bus = search_events if search_events is not None else EventBus()
    app.config["GRAPH"] = graph
    app.config["SEARCH_EVENTS"] = bus

    # ====================
    # Error Mapping
    # ====================

    @app.errorhandler(GraphError)
    def graph_error(e: GraphError):
        if isinstance(e, UnknownNodeError):
            status = 404
        elif isinstance(e, (DuplicateNodeError, GraphBusyError)):
            status = 409
        else:
            status = 400
        logger.info(f"Rejected request: {e}")
        return jsonify({"error": str(e)}), status

    def payload() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    # ====================
    # Graph
    # ====================

    @app.route("/graph")
    def get_graph():
        return jsonify({
            "nodes": graph.nodes(),
            "edges": [list(edge) for edge in graph.edges()],
        })

    @app.route("/graph/stats")
    def graph_stats():
        return jsonify(summarize(graph).to_dict())

    @app.route("/nodes", methods=["POST"])
    def add_node():
        data = payload()
        label = data.get("label", "")
        connect_to = data.get("connect_to") or None
        graph.add_node(label, connect_to=connect_to)
        return jsonify({"label": label, "neighbors": graph.neighbors(label)}), 201

    @app.route("/nodes/<label>", methods=["DELETE"])
    def remove_node(label: str):
        graph.remove_node(label)
        return jsonify({"removed": label})

    @app.route("/nodes/<label>/neighbors")
    def neighbors(label: str):
        return jsonify({"label": label, "neighbors": graph.neighbors(label)})

    @app.route("/edges", methods=["POST"])
    def add_edge():
        data = payload()
        a, b = data.get("a", ""), data.get("b", "")
        added = graph.add_edge(a, b)
        return jsonify({"edge": [a, b], "added": added}), 201 if added else 200

    @app.route("/edges/<a>/<b>", methods=["DELETE"])
    def remove_edge(a: str, b: str):
        removed = graph.remove_edge(a, b)
        return jsonify({"edge": [a, b], "removed": removed})

    # ====================
    # Search
    # ====================

    @app.route("/search", methods=["POST"])
    def run_search():
        data = payload()
        events = []
        request_bus = EventBus()
        request_bus.subscribe(events.append)
        request_bus.subscribe(bus.publish)
        result = search(graph, data.get("start", ""), data.get("end", ""), on_event=request_bus)
        body = result.to_dict()
        body["events"] = [event.to_dict() for event in events]
        return jsonify(body)

    @app.route("/search/stream")
    def stream_search():
        start = request.args.get("start", "")
        end = request.args.get("end", "")
        try:
            delay = float(request.args.get("delay", 0))
        except ValueError:
            return jsonify({"error": "delay must be a number"}), 400
        delay = min(max(delay, 0.0), STREAM_MAX_DELAY_SECONDS)

        # Validates start/end before the response begins
        run = BackgroundSearch(graph, start, end, step_delay=delay, on_event=bus).start()

        def generate():
            try:
                for event in run.events():
                    yield f"data: {json.dumps(event.to_dict())}\n\n"
            finally:
                # Client went away or stream finished
                run.cancel()

        return Response(stream_with_context(generate()), mimetype="text/event-stream")

    return app


# ====================
# Main
# ====================

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    print("\n=== BFS Routing ===")
    print(f"Serving http://{API_HOST}:{API_PORT}\n")

    create_app().run(host=API_HOST, port=API_PORT, debug=False)
