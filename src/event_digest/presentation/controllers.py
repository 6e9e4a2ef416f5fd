import logging

from ..application.interfaces import IDigestUseCase
from ..domain.entities import DigestRunReport


class DigestController:
    def __init__(self, use_case: IDigestUseCase, logger: logging.LoggerAdapter):
        self.use_case = use_case
        self.logger = logger

    def run_digest(self) -> DigestRunReport:
        self.logger.info("Avvio digest degli archivi orari.")
        report = self.use_case.run()
        self.logger.info(
            f"Riepilogo: Archivi={len(report.digests)}, Eventi={report.total_events}, "
            f"NuoviUtenti={len(report.new_users)}"
        )
        return report

    def show_info(self) -> None:
        info = self.use_case.get_dataset_info()
        self.logger.info(f"Percorso eventi: {info['path']}")
        self.logger.info(f"Dimensione: {info['size_mb']:.2f} MB")
        self.logger.info(f"Archivi: {info['archives']} (digest in cache: {info['cached']})")
        self.logger.info(f"Utenti noti: {info['known_users']}")

        summ = info.get("summary")
        if summ:
            self.logger.info(
                f"Riepilogo: {summ['hours']} ore, {summ['events']} eventi "
                f"nel range {summ['first_hour']:%Y-%m-%d-%H} -> {summ['last_hour']:%Y-%m-%d-%H}"
            )
        else:
            self.logger.info("Nessun riepilogo ancora prodotto.")
