from django.apps import AppConfig


class AvailabilityConfig(AppConfig):
    name = "availability"

    engine = None
    blocking = None

    def ready(self):
        from .services.blocking import BlockingWorkflow
        from .services.engine import AvailabilityEngine
        from .services.store import OrmAvailabilityStore

        self.engine = AvailabilityEngine(OrmAvailabilityStore())
        self.blocking = BlockingWorkflow(self.engine)
