"""
Debug logging of actor events.

Attached to an actor when it is built with ``verbose=True``. It only writes
log records; it never touches resources or counters.
"""
import logging

MESSAGES = {
    'thinking': "Actor {actor} is THINKING",
    'hungry': "Actor {actor} is HUNGRY",
    'eating': "Actor {actor} is EATING",
    'pickup': "Actor {actor} picked up resource {resource}",
    'putdown': "Actor {actor} put down resource {resource}",
    'quit': "Actor {actor} has quit",
}


class LoggingObserver:
    def __init__(self, actor_id: int, level: int = logging.INFO):
        self.level = level
        self.logger = logging.getLogger(f"Actor-{actor_id}")

    def record(self, interaction):
        template = MESSAGES.get(interaction.action)
        if template is None:
            self.logger.warning(f"Unknown action {interaction.action!r}")
            return
        self.logger.log(self.level, template.format(actor=interaction.actor,
                                                    resource=interaction.resource))
