from dataclasses import dataclass, field
from typing import Optional

from src.core.config import GameConfig
from src.core.structures.avl_tree import AVLNode, AVLTree
from src.core.game.score import ScoreLedger
from src.core.io.value_supplier import ValueSupplier


@dataclass(frozen=True)
class PendingRotation:
    """Desbalanceamento detectado e ainda não resolvido."""
    node: AVLNode
    kind: str


@dataclass
class Session:
    """
    Tudo o que pertence a uma partida: árvore, placar, valores usados e
    o que está "em voo". Criada uma vez por partida e entregue ao motor.
    """
    config: GameConfig
    tree: AVLTree = field(default_factory=AVLTree)
    score: ScoreLedger = field(default_factory=ScoreLedger)
    supplier: Optional[ValueSupplier] = None
    pending_value: Optional[int] = None
    pending_rotation: Optional[PendingRotation] = None

    def __post_init__(self):
        if self.supplier is None:
            self.supplier = ValueSupplier(self.config.min_value, self.config.max_value, self.config.seed)

    @classmethod
    def new(cls, config: Optional[GameConfig] = None) -> "Session":
        return cls(config=config or GameConfig())
