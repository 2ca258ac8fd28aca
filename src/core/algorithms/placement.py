from dataclasses import dataclass
from typing import List, Optional

from src.core.structures.avl_tree import AVLNode, Slot


class RejectionReason:
    INVALID_ORDERING = "ORDEM_INVALIDA"
    DUPLICATE_KEY = "CHAVE_DUPLICADA"


@dataclass(frozen=True)
class PlacementResult:
    accepted: bool
    reason: Optional[str] = None

    def __bool__(self):
        return self.accepted


ACCEPTED = PlacementResult(True)


class PlacementValidator:
    """
    Decide se um valor pode ocupar uma vaga livre.

    Por padrão compara apenas com o nó alvo imediato.
    Com strict_ancestors=True o valor também é conferido contra
    toda a cadeia de ancestrais, o que garante a ordem global da BST.
    """
    def __init__(self, strict_ancestors: bool = False):
        self.strict_ancestors = strict_ancestors

    def validate(self, target: AVLNode, slot: str, key: int,
                 ancestors: Optional[List[AVLNode]] = None) -> PlacementResult:
        """
        Args:
            target: nó dono da vaga (a própria raiz vazia para Slot.ROOT)
            slot: Slot.ROOT, Slot.LEFT ou Slot.RIGHT
            key: valor candidato
            ancestors: caminho raiz → alvo (inclusive); exigido no modo estrito
        """
        if slot == Slot.ROOT:
            return ACCEPTED

        result = self._check_local(target, slot, key)
        if not result.accepted or not self.strict_ancestors:
            return result

        if ancestors is None:
            raise ValueError("O modo estrito precisa do caminho de ancestrais.")
        return self._check_ancestors(ancestors, key)

    @staticmethod
    def _check_local(target: AVLNode, slot: str, key: int) -> PlacementResult:
        if key == target.key:
            return PlacementResult(False, RejectionReason.DUPLICATE_KEY)
        if slot == Slot.LEFT and key < target.key:
            return ACCEPTED
        if slot == Slot.RIGHT and key > target.key:
            return ACCEPTED
        return PlacementResult(False, RejectionReason.INVALID_ORDERING)

    @staticmethod
    def _check_ancestors(path: List[AVLNode], key: int) -> PlacementResult:
        # Cada passo pai → filho impõe um limite ao valor novo
        for parent, child in zip(path, path[1:]):
            if key == parent.key:
                return PlacementResult(False, RejectionReason.DUPLICATE_KEY)
            went_left = parent.left is child
            if went_left and key > parent.key:
                return PlacementResult(False, RejectionReason.INVALID_ORDERING)
            if not went_left and key < parent.key:
                return PlacementResult(False, RejectionReason.INVALID_ORDERING)
        return ACCEPTED
