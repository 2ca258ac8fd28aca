from typing import Callable, Dict, Optional, Tuple

from src.core.structures.avl_tree import (
    AVLNode, RotationError, balance_factor, rotate_ll, rotate_lr, rotate_rl, rotate_rr,
)


class RotationKind:
    """Os quatro formatos de rebalanceamento AVL."""
    LL = "LL"
    LR = "LR"
    RL = "RL"
    RR = "RR"

    ALL = (LL, LR, RL, RR)


ROTATIONS: Dict[str, Callable[[AVLNode], AVLNode]] = {
    RotationKind.LL: rotate_ll,
    RotationKind.RR: rotate_rr,
    RotationKind.LR: rotate_lr,
    RotationKind.RL: rotate_rl,
}


class BalanceAnalyzer:
    """
    Detecta o primeiro nó que viola o invariante AVL e classifica a rotação.
    Não guarda estado: cada chamada recalcula tudo a partir da raiz.
    """

    @staticmethod
    def classify(node: AVLNode) -> Optional[str]:
        """Tipo de rotação que o nó precisa, ou None se estiver balanceado."""
        bf = balance_factor(node)
        if bf > 1:
            return RotationKind.LL if balance_factor(node.left) >= 0 else RotationKind.LR
        if bf < -1:
            return RotationKind.RR if balance_factor(node.right) <= 0 else RotationKind.RL
        return None

    @staticmethod
    def find_imbalance(root: Optional[AVLNode]) -> Tuple[Optional[AVLNode], Optional[str]]:
        """
        Percorre em pré-ordem (nó, esquerda, direita).
        Com vários nós desbalanceados, vence o mais raso e mais à esquerda.
        Retorna (None, None) se a árvore inteira estiver balanceada.
        """
        if root is None:
            return None, None

        kind = BalanceAnalyzer.classify(root)
        if kind:
            return root, kind

        node, kind = BalanceAnalyzer.find_imbalance(root.left)
        if kind:
            return node, kind
        return BalanceAnalyzer.find_imbalance(root.right)

    @staticmethod
    def is_balanced(root: Optional[AVLNode]) -> bool:
        return BalanceAnalyzer.find_imbalance(root)[1] is None

    @staticmethod
    def rotate(pivot: AVLNode, kind: str) -> AVLNode:
        """Aplica a rotação pedida e devolve a nova raiz da subárvore."""
        if kind not in ROTATIONS:
            raise RotationError(f"Tipo de rotação desconhecido: {kind!r}")
        return ROTATIONS[kind](pivot)
