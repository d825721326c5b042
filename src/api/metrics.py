from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "planner_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "planner_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

TASKS_PARSED_TOTAL = get_or_create_metric(
    "planner_tasks_parsed_total", "Total tasks produced by the parsing pipeline", Counter
)

LLM_TIER_TOTAL = get_or_create_metric(
    "planner_llm_tier_total", "LLM tier usage", Counter, labelnames=["tier"]
)


def observe_request(endpoint: str, status: str, elapsed_s: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=endpoint, status=status).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=endpoint).observe(elapsed_s)
