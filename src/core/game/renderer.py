"""
Fronteira entre o motor do jogo e a apresentação.
O motor só conhece este conjunto fixo de ganchos; nunca inspeciona
objetos gráficos.
"""
from typing import Any, Dict, Optional

from src.core.structures.avl_tree import AVLNode
from src.core.game.events import EventType, FIFOEventQueue, GameEvent


class GameRenderer:
    """Ganchos chamados pelo ChallengeEngine. A implementação padrão ignora tudo."""

    def on_tree_changed(self, snapshot: Optional[Dict[str, Any]]):
        pass

    def on_value_ready(self, value: int):
        pass

    def on_placement_result(self, accepted: bool, reason: Optional[str] = None):
        pass

    def on_imbalance_detected(self, kind: str, node: AVLNode):
        pass

    def on_rotation_result(self, correct: bool):
        pass

    def on_score_changed(self, total: int):
        pass

    def on_supplier_exhausted(self):
        pass


class QueuedRenderer(GameRenderer):
    """
    Converte cada gancho em um GameEvent numa fila FIFO.
    A interface drena a fila quando quiser (ex.: depois de uma animação).
    """
    def __init__(self, queue: Optional[FIFOEventQueue] = None):
        self.queue = queue if queue is not None else FIFOEventQueue()

    def _push(self, event_type: str, **payload):
        self.queue.enqueue(GameEvent(event_type=event_type, payload=payload))

    def on_tree_changed(self, snapshot):
        self._push(EventType.TREE_CHANGED, snapshot=snapshot)

    def on_value_ready(self, value):
        self._push(EventType.VALUE_READY, value=value)

    def on_placement_result(self, accepted, reason=None):
        self._push(EventType.PLACEMENT_RESULT, accepted=accepted, reason=reason)

    def on_imbalance_detected(self, kind, node):
        self._push(EventType.IMBALANCE_DETECTED, kind=kind, node_key=node.key)

    def on_rotation_result(self, correct):
        self._push(EventType.ROTATION_RESULT, correct=correct)

    def on_score_changed(self, total):
        self._push(EventType.SCORE_CHANGED, total=total)

    def on_supplier_exhausted(self):
        self._push(EventType.SUPPLIER_EXHAUSTED)
