from typing import Literal

DigestCacheStatus = Literal[
    "HIT",
    "INCOMPLETE",
    "MISS",
]
"""
Esito della consultazione della cache per un singolo archivio orario.

Valori possibili:
- HIT:
    L'artefatto `<archivio>.digest.json` esiste e contiene un Digest valido.
    Il Digest viene riutilizzato e gli username dell'archivio NON vengono
    estratti di nuovo.
- INCOMPLETE:
    L'artefatto esiste ma è vuoto o corrotto (crash durante una precedente
    scrittura). Il Digest viene ricalcolato e l'artefatto sovrascritto.
- MISS:
    L'artefatto non esisteva ed è stato creato in modo esclusivo da questa
    esecuzione, che ne diventa proprietaria e calcola il Digest.
"""

DigestStage = Literal[
    "enumerate",
    "cache",
    "count",
    "extract",
    "filename",
    "summary",
    "known_users",
    "catalog",
]
"""Fase della pipeline in cui può verificarsi un errore irrecuperabile."""
