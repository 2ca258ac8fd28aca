from typing import Any, Dict, List, Optional, Tuple


class Slot:
    """Vagas onde um valor pode ser colocado."""
    ROOT = "root"
    LEFT = "left"
    RIGHT = "right"

    ALL = (ROOT, LEFT, RIGHT)


class SlotOccupiedError(ValueError):
    """A vaga escolhida já possui um nó (erro de programação/UI)."""


class RotationError(ValueError):
    """Rotação invocada sobre uma forma de árvore que não a permite."""


class AVLNode:
    """
    Nó da árvore do jogo.
    A chave é None apenas na raiz vazia, antes da primeira jogada.
    Não há ponteiro para o pai nem altura armazenada: tudo é recalculado.
    """
    def __init__(self, key: Optional[int] = None):
        self.key = key
        self.left: Optional["AVLNode"] = None
        self.right: Optional["AVLNode"] = None

    @property
    def is_empty(self) -> bool:
        return self.key is None

    def __repr__(self):
        return f"AVLNode({self.key})"


# --- Consultas ---

def height(node: Optional[AVLNode]) -> int:
    if node is None:
        return 0
    return 1 + max(height(node.left), height(node.right))


def balance_factor(node: Optional[AVLNode]) -> int:
    """Altura da esquerda menos altura da direita."""
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def in_order_keys(node: Optional[AVLNode]) -> List[int]:
    keys = []
    _in_order(node, keys)
    return keys


def _in_order(node, keys):
    if node:
        _in_order(node.left, keys)
        if not node.is_empty:
            keys.append(node.key)
        _in_order(node.right, keys)


# --- Mutação ---

def ensure_slot_free(node: AVLNode, slot: str):
    """Falha se a vaga não existir ou já estiver preenchida."""
    if slot == Slot.ROOT:
        if not node.is_empty:
            raise SlotOccupiedError(f"A raiz já contém o valor {node.key}.")
        return
    if slot not in (Slot.LEFT, Slot.RIGHT):
        raise ValueError(f"Vaga desconhecida: {slot!r}")
    if node.is_empty:
        raise ValueError("Um nó vazio só aceita a vaga 'root'.")
    if getattr(node, slot) is not None:
        raise SlotOccupiedError(f"O filho {slot} do nó {node.key} já está ocupado.")


def place_at(node: AVLNode, slot: str, key: int) -> AVLNode:
    """
    Coloca a chave na vaga indicada.
    - ROOT: preenche a raiz vazia no próprio nó (nenhum nó novo é criado).
    - LEFT/RIGHT: cria uma folha nova e pendura no filho correspondente.
    Retorna o nó que passou a guardar a chave.
    """
    ensure_slot_free(node, slot)
    if slot == Slot.ROOT:
        node.key = key
        return node

    leaf = AVLNode(key)
    setattr(node, slot, leaf)
    return leaf


# --- Rotações ---
# Cada rotação devolve a nova raiz da subárvore. Quem chama é responsável
# por religar o pai (ou trocar a raiz da árvore), pois não há ponteiro de pai.

def rotate_ll(pivot: AVLNode) -> AVLNode:
    """Rotação simples à direita (caso Left-Left)."""
    b = pivot.left
    if b is None:
        raise RotationError(f"Rotação LL exige filho esquerdo em {pivot.key}.")
    pivot.left = b.right
    b.right = pivot
    return b


def rotate_rr(pivot: AVLNode) -> AVLNode:
    """Rotação simples à esquerda (caso Right-Right)."""
    b = pivot.right
    if b is None:
        raise RotationError(f"Rotação RR exige filho direito em {pivot.key}.")
    pivot.right = b.left
    b.left = pivot
    return b


def rotate_lr(pivot: AVLNode) -> AVLNode:
    """Rotação dupla: RR no filho esquerdo, depois LL no pivô."""
    if pivot.left is None or pivot.left.right is None:
        raise RotationError(f"Rotação LR exige neto esquerdo-direito em {pivot.key}.")
    pivot.left = rotate_rr(pivot.left)
    return rotate_ll(pivot)


def rotate_rl(pivot: AVLNode) -> AVLNode:
    """Rotação dupla: LL no filho direito, depois RR no pivô."""
    if pivot.right is None or pivot.right.left is None:
        raise RotationError(f"Rotação RL exige neto direito-esquerdo em {pivot.key}.")
    pivot.right = rotate_ll(pivot.right)
    return rotate_rr(pivot)


class AVLTree:
    """
    Árvore do jogo Tetris Tree.
    Guarda apenas a raiz (que começa vazia). Quem decide quando rotacionar
    é o motor do jogo; a árvore só executa as operações estruturais.
    """
    def __init__(self):
        self.root = AVLNode()

    @property
    def is_empty(self) -> bool:
        return self.root.is_empty

    def size(self) -> int:
        return len(in_order_keys(self.root))

    def height(self) -> int:
        return 0 if self.is_empty else height(self.root)

    def in_order_keys(self) -> List[int]:
        return in_order_keys(self.root)

    def path_to(self, target: AVLNode) -> Optional[List[AVLNode]]:
        """
        Caminho raiz → alvo, comparando por identidade.
        Usa pilha explícita em vez de descer por chave: a validação local
        não garante a ordem global, então a chave pode apontar o lado errado.
        """
        stack: List[Tuple[AVLNode, List[AVLNode]]] = [(self.root, [self.root])]
        while stack:
            node, path = stack.pop()
            if node is target:
                return path
            if node.right:
                stack.append((node.right, path + [node.right]))
            if node.left:
                stack.append((node.left, path + [node.left]))
        return None

    def find_parent(self, target: AVLNode) -> Optional[AVLNode]:
        """Pai do nó alvo, ou None se ele for a raiz."""
        path = self.path_to(target)
        if path is None:
            raise ValueError(f"O nó {target.key} não pertence à árvore.")
        return path[-2] if len(path) > 1 else None

    def replace_subtree(self, old: AVLNode, new: AVLNode, parent: Optional[AVLNode]):
        """Religa a nova raiz de subárvore no lugar de `old`."""
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        elif parent.right is old:
            parent.right = new
        else:
            raise ValueError(f"O nó {old.key} não é filho de {parent.key}.")

    def empty_slots(self) -> List[Tuple[AVLNode, str]]:
        """Vagas livres em pré-ordem, prontas para a interface oferecer."""
        if self.is_empty:
            return [(self.root, Slot.ROOT)]
        slots = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.left is None:
                slots.append((node, Slot.LEFT))
            if node.right is None:
                slots.append((node, Slot.RIGHT))
            if node.right:
                stack.append(node.right)
            if node.left:
                stack.append(node.left)
        return slots

    def is_valid_bst(self) -> bool:
        """Verificação global da propriedade de BST (todos os ancestrais)."""
        keys = self.in_order_keys()
        return all(a < b for a, b in zip(keys, keys[1:]))

    def snapshot(self) -> Optional[Dict[str, Any]]:
        """Cópia aninhada e independente da estrutura, para redesenho."""
        return self._snapshot(self.root)

    def _snapshot(self, node):
        if node is None:
            return None
        return {
            'key': node.key,
            'left': self._snapshot(node.left),
            'right': self._snapshot(node.right),
            'height': height(node),
            'balance': balance_factor(node),
        }

    def describe(self) -> str:
        """Notação compacta, ex.: {50:[30:[10,_],_]}"""
        if self.is_empty:
            return "{}"
        return "{" + self._describe(self.root) + "}"

    def _describe(self, node):
        if node is None:
            return "_"
        if node.left is None and node.right is None:
            return str(node.key)
        return f"{node.key}:[{self._describe(node.left)},{self._describe(node.right)}]"

    def __repr__(self):
        return f"AVLTree{self.describe()}"
