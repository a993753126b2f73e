import logging
from typing import Callable
from shared.config import settings

logger = logging.getLogger(__name__)

def traceable(name: str) -> Callable:
    """Trace a pipeline step in LangSmith when LANGSMITH_TRACING=1, otherwise leave it untouched."""
    if not settings.langsmith_tracing:
        def _wrap(func):
            return func
        return _wrap

    # Lazy import so langsmith is only needed when tracing is on
    from langsmith import traceable as _traceable  # type: ignore
    logger.debug(f"LangSmith tracing enabled for {name} (project={settings.langsmith_project})")
    return _traceable(
        name=name,
        run_type="chain",
        project_name=settings.langsmith_project,
        tags=["policy-summaries", settings.app_env],
    )
