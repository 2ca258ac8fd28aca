import sys
import os
import random

import pytest

# Setup de importação
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.structures.avl_tree import (
    AVLNode, AVLTree, Slot, SlotOccupiedError, RotationError,
    height, balance_factor, in_order_keys, place_at,
    rotate_ll, rotate_rr, rotate_lr, rotate_rl,
)
from tree_helpers import build


def test_height_and_balance_factor():
    print("--- Teste: altura e fator de balanceamento ---")
    assert height(None) == 0
    assert balance_factor(None) == 0

    tree = build([50, 30, 10])
    print(f"Árvore: {tree.describe()}")
    assert height(tree.root) == 3
    assert balance_factor(tree.root) == 2
    assert balance_factor(tree.root.left) == 1
    assert balance_factor(tree.root.left.left) == 0

    tree = build([50, 30, 70, 60])
    assert height(tree.root) == 3
    assert balance_factor(tree.root) == -1
    print(">> SUCESSO: alturas recalculadas corretamente.")


def test_place_at_root_fills_in_place():
    tree = AVLTree()
    root = tree.root
    assert tree.is_empty
    assert tree.describe() == "{}"

    filled = place_at(root, Slot.ROOT, 50)

    assert filled is root, "A raiz deve ser preenchida no próprio nó"
    assert tree.root.key == 50
    assert tree.describe() == "{50}"


def test_place_at_children_creates_leaves():
    tree = AVLTree()
    place_at(tree.root, Slot.ROOT, 50)
    left = place_at(tree.root, Slot.LEFT, 30)
    right = place_at(tree.root, Slot.RIGHT, 70)

    assert tree.root.left is left and left.key == 30
    assert tree.root.right is right and right.key == 70
    assert left.left is None and left.right is None
    assert tree.describe() == "{50:[30,70]}"


def test_place_at_occupied_slot_fails():
    tree = AVLTree()
    place_at(tree.root, Slot.ROOT, 50)
    place_at(tree.root, Slot.LEFT, 30)

    with pytest.raises(SlotOccupiedError):
        place_at(tree.root, Slot.LEFT, 20)
    with pytest.raises(SlotOccupiedError):
        place_at(tree.root, Slot.ROOT, 40)

    # A árvore não muda após a falha
    assert tree.describe() == "{50:[30,_]}"


def test_place_at_rejects_bad_slots():
    empty = AVLNode()
    with pytest.raises(ValueError):
        place_at(empty, Slot.LEFT, 10)
    with pytest.raises(ValueError):
        place_at(AVLNode(5), "middle", 10)


def test_rotations_preserve_in_order_sequence():
    print("--- Teste: rotações preservam a ordem in-order ---")
    cases = [
        (rotate_ll, [50, 30, 70, 20, 40, 10]),
        (rotate_rr, [50, 30, 70, 60, 80, 90]),
        (rotate_lr, [50, 30, 70, 20, 40, 45]),
        (rotate_rl, [50, 30, 70, 60, 80, 55]),
    ]
    for rotation, keys in cases:
        tree = build(keys)
        before = in_order_keys(tree.root)
        new_root = rotation(tree.root)
        tree.replace_subtree(tree.root, new_root, None)
        after = in_order_keys(tree.root)
        print(f"  {rotation.__name__}: {before} -> {tree.describe()}")
        assert before == after, f"{rotation.__name__} alterou a ordem dos valores"
    print(">> SUCESSO: todas as rotações preservam a ordem.")


def test_rotations_preserve_in_order_on_random_trees():
    rng = random.Random(7)
    rotations = {
        rotate_ll: lambda n: n.left is not None,
        rotate_rr: lambda n: n.right is not None,
        rotate_lr: lambda n: n.left is not None and n.left.right is not None,
        rotate_rl: lambda n: n.right is not None and n.right.left is not None,
    }
    checked = 0
    for _ in range(200):
        tree = build(rng.sample(range(10, 100), rng.randint(3, 15)))
        for rotation, applicable in rotations.items():
            if applicable(tree.root):
                before = tree.in_order_keys()
                tree.replace_subtree(tree.root, rotation(tree.root), None)
                assert tree.in_order_keys() == before
                checked += 1
    assert checked > 100


def test_ll_rotation_shape():
    tree = build([50, 30, 10])
    new_root = rotate_ll(tree.root)
    tree.replace_subtree(tree.root, new_root, None)
    assert tree.describe() == "{30:[10,50]}"


def test_rr_rotation_shape():
    tree = build([10, 30, 50])
    tree.replace_subtree(tree.root, rotate_rr(tree.root), None)
    assert tree.describe() == "{30:[10,50]}"


def test_double_rotation_shapes():
    tree = build([50, 30, 40])
    tree.replace_subtree(tree.root, rotate_lr(tree.root), None)
    assert tree.describe() == "{40:[30,50]}"

    tree = build([30, 50, 40])
    tree.replace_subtree(tree.root, rotate_rl(tree.root), None)
    assert tree.describe() == "{40:[30,50]}"


def test_rotation_without_required_child_fails_loudly():
    leaf = AVLNode(10)
    for rotation in (rotate_ll, rotate_rr, rotate_lr, rotate_rl):
        with pytest.raises(RotationError):
            rotation(leaf)

    # LR sem neto esquerdo-direito não pode mexer na árvore
    tree = build([50, 30, 10])
    with pytest.raises(RotationError):
        rotate_lr(tree.root)
    assert tree.describe() == "{50:[30:[10,_],_]}"


def test_find_parent_and_replace_subtree():
    tree = build([50, 30, 70, 20, 10])
    node_30 = tree.root.left
    node_20 = node_30.left

    assert tree.find_parent(tree.root) is None
    assert tree.find_parent(node_30) is tree.root
    assert tree.find_parent(node_20) is node_30
    assert [n.key for n in tree.path_to(node_20)] == [50, 30, 20]

    new_root = rotate_ll(node_30)
    tree.replace_subtree(node_30, new_root, tree.root)
    assert tree.describe() == "{50:[20:[10,30],70]}"

    with pytest.raises(ValueError):
        tree.find_parent(AVLNode(99))


def test_empty_slots_listing():
    tree = AVLTree()
    assert tree.empty_slots() == [(tree.root, Slot.ROOT)]

    tree = build([50, 30])
    slots = [(n.key, s) for n, s in tree.empty_slots()]
    assert slots == [(50, Slot.RIGHT), (30, Slot.LEFT), (30, Slot.RIGHT)]


def test_snapshot_is_independent_copy():
    tree = build([50, 30])
    snap = tree.snapshot()
    assert snap['key'] == 50
    assert snap['left']['key'] == 30
    assert snap['right'] is None
    assert snap['height'] == 2 and snap['balance'] == 1

    place_at(tree.root, Slot.RIGHT, 70)
    assert snap['right'] is None, "O snapshot não deve acompanhar mudanças"


def test_local_checks_do_not_guarantee_global_order():
    """
    Cada inserção respeita o nó alvo imediato, mas 40 fica à direita de 30
    dentro da subárvore direita de 50: a ordem global quebra.
    """
    tree = AVLTree()
    place_at(tree.root, Slot.ROOT, 50)
    node_30 = place_at(tree.root, Slot.LEFT, 30)
    place_at(node_30, Slot.RIGHT, 60)   # 60 > 30, mas 60 > 50 também
    assert not tree.is_valid_bst()

    assert build([50, 30, 70, 20, 40]).is_valid_bst()


if __name__ == "__main__":
    test_height_and_balance_factor()
    test_rotations_preserve_in_order_sequence()
