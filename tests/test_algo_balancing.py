import sys
import os
import random

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.structures.avl_tree import AVLTree, AVLNode, Slot, RotationError, place_at, balance_factor
from src.core.algorithms.balancing import BalanceAnalyzer, RotationKind
from tree_helpers import build, insert_as_bst


def all_nodes(node):
    if node is None:
        return []
    return [node] + all_nodes(node.left) + all_nodes(node.right)


def test_balanced_trees_report_nothing():
    print("--- Teste: árvores balanceadas ---")
    assert BalanceAnalyzer.find_imbalance(None) == (None, None)
    assert BalanceAnalyzer.find_imbalance(AVLNode()) == (None, None)

    for keys in ([50], [50, 30], [50, 30, 70], [50, 30, 70, 20, 40, 60, 80, 10]):
        tree = build(keys)
        assert BalanceAnalyzer.find_imbalance(tree.root) == (None, None), tree.describe()
        assert BalanceAnalyzer.is_balanced(tree.root)
    print(">> SUCESSO: nenhuma rotação pedida.")


def test_random_avl_valid_trees_report_nothing():
    rng = random.Random(3)
    for _ in range(300):
        tree = build(rng.sample(range(10, 100), rng.randint(1, 12)))
        nodes = all_nodes(tree.root)
        if all(abs(balance_factor(n)) <= 1 for n in nodes):
            assert BalanceAnalyzer.find_imbalance(tree.root) == (None, None)
        else:
            node, kind = BalanceAnalyzer.find_imbalance(tree.root)
            assert abs(balance_factor(node)) > 1
            assert kind in RotationKind.ALL


def test_classification_of_the_four_cases():
    print("--- Teste: classificação LL / LR / RR / RL ---")
    cases = {
        RotationKind.LL: [50, 30, 10],
        RotationKind.LR: [50, 30, 40],
        RotationKind.RR: [10, 30, 50],
        RotationKind.RL: [30, 50, 40],
    }
    for expected, keys in cases.items():
        tree = build(keys)
        node, kind = BalanceAnalyzer.find_imbalance(tree.root)
        print(f"  {tree.describe()} -> {kind} em {node.key}")
        assert node is tree.root
        assert kind == expected


def test_left_child_balanced_counts_as_ll():
    # Filho esquerdo com fator 0 é classificado como LL
    tree = AVLTree()
    place_at(tree.root, Slot.ROOT, 50)
    b = place_at(tree.root, Slot.LEFT, 30)
    place_at(b, Slot.LEFT, 20)
    place_at(b, Slot.RIGHT, 40)
    assert balance_factor(b) == 0
    assert BalanceAnalyzer.find_imbalance(tree.root) == (tree.root, RotationKind.LL)


def test_preorder_tie_break_prefers_shallowest_then_left():
    print("--- Teste: desempate em pré-ordem ---")
    # Duas subárvores desbalanceadas no mesmo nível: a da esquerda vence
    tree = AVLTree()
    place_at(tree.root, Slot.ROOT, 50)
    left = place_at(tree.root, Slot.LEFT, 30)
    right = place_at(tree.root, Slot.RIGHT, 70)
    place_at(place_at(left, Slot.LEFT, 20), Slot.LEFT, 10)
    place_at(place_at(right, Slot.RIGHT, 80), Slot.RIGHT, 90)
    assert BalanceAnalyzer.is_balanced(tree.root) is False

    node, kind = BalanceAnalyzer.find_imbalance(tree.root)
    assert node is left and kind == RotationKind.LL

    # Nó mais raso desbalanceado tem precedência sobre o descendente
    tree = build([50, 30, 20, 10])
    node, kind = BalanceAnalyzer.find_imbalance(tree.root)
    assert node is tree.root and kind == RotationKind.LL
    print(">> SUCESSO: pré-ordem respeitada.")


def test_rotation_makes_progress():
    """Depois da rotação certa, o mesmo (nó, tipo) nunca é reportado de novo."""
    rng = random.Random(11)
    for _ in range(100):
        tree = AVLTree()
        for key in rng.sample(range(10, 100), 30):
            # Insere como o jogador faria e resolve antes do próximo valor
            insert_as_bst(tree, key)
            for _ in range(10):
                node, kind = BalanceAnalyzer.find_imbalance(tree.root)
                if kind is None:
                    break
                parent = tree.find_parent(node)
                before = tree.in_order_keys()
                tree.replace_subtree(node, BalanceAnalyzer.rotate(node, kind), parent)
                assert tree.in_order_keys() == before
                assert BalanceAnalyzer.find_imbalance(tree.root) != (node, kind)
            assert BalanceAnalyzer.is_balanced(tree.root)
        assert tree.is_valid_bst()


def test_rotate_unknown_kind_fails():
    tree = build([50, 30, 10])
    with pytest.raises(RotationError):
        BalanceAnalyzer.rotate(tree.root, "XY")


if __name__ == "__main__":
    test_balanced_trees_report_nothing()
    test_classification_of_the_four_cases()
    test_preorder_tie_break_prefers_shallowest_then_left()
