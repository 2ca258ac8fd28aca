from collections import deque, Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


class EventType:
    TREE_CHANGED = "ARVORE_ALTERADA"
    VALUE_READY = "VALOR_PRONTO"
    PLACEMENT_RESULT = "RESULTADO_INSERCAO"
    IMBALANCE_DETECTED = "DESBALANCEAMENTO"
    ROTATION_RESULT = "RESULTADO_ROTACAO"
    SCORE_CHANGED = "PLACAR_ALTERADO"
    SUPPLIER_EXHAUSTED = "VALORES_ESGOTADOS"


@dataclass
class GameEvent:
    """
    Notificação do motor para a interface.
    O payload é um dicionário simples (chave/valores), sem referências a nós.
    """
    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __repr__(self):
        return f"[{self.event_type}] {self.payload}"


class FIFOEventQueue:
    """
    Fila simples do lado da interface.
    O motor já terminou a transição quando o evento chega aqui; a interface
    consome no ritmo das próprias animações.
    """
    def __init__(self):
        self._queue = deque()

    def enqueue(self, event: GameEvent):
        self._queue.append(event)

    def dequeue(self) -> Optional[GameEvent]:
        return self._queue.popleft() if self._queue else None

    def peek(self) -> Optional[GameEvent]:
        return self._queue[0] if self._queue else None

    def drain(self) -> List[GameEvent]:
        """Remove e retorna todos os eventos pendentes, em ordem de chegada."""
        events = list(self._queue)
        self._queue.clear()
        return events

    def is_empty(self) -> bool:
        return len(self._queue) == 0

    def size(self) -> int:
        return len(self._queue)

    def get_statistics(self) -> Dict[str, Any]:
        """Contagem de eventos pendentes por tipo."""
        return {
            'total': len(self._queue),
            'by_type': dict(Counter(e.event_type for e in self._queue)),
        }
