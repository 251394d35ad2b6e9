"""Bus d'évènements synchrone reliant l'agent à ses observateurs."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, Type

Subscriber = Callable[[object], None]
_Subscription = Tuple[Optional[type], Subscriber]


class EventBus:
    """Diffuse les évènements aux abonnés, dans l'ordre d'enregistrement.

    Un abonné peut restreindre sa souscription à un type d'évènement
    (`DecisionFallbackEvent` pour surveiller les replis, par exemple).
    Une exception levée par un abonné interrompt la diffusion et remonte
    à l'émetteur.
    """

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: List[_Subscription] = []

    def subscribe(
        self, callback: Subscriber, event_type: Optional[Type[object]] = None
    ) -> Callable[[], None]:
        """Enregistre `callback` et retourne sa fonction de désinscription."""

        subscription: _Subscription = (event_type, callback)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

        return unsubscribe

    def publish(self, event: object) -> None:
        for event_type, callback in tuple(self._subscriptions):
            if event_type is None or isinstance(event, event_type):
                callback(event)
