import logging
import sys
from typing import Any, MutableMapping


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configura il formato e il livello di logging utilizzato in tutti i layer.
    I messaggi vanno su stdout: costituiscono la cronaca di avanzamento della pipeline.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)-8s - [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


class LayerLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter per il sistema di logging che aggiunge il nome del layer
    architetturale ai messaggi di log in modo sicuro.
    """
    def process(
        self,
        msg: Any,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[Any, MutableMapping[str, Any]]:
        layer_name = self.extra.get("layer", "Generic") if self.extra else "Generic"
        return f"[{layer_name}] {msg}", kwargs
