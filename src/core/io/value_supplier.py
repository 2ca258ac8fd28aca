"""
Fornecedor dos números que "caem" na tela.
Cada valor aparece no máximo uma vez por sessão.
"""
import random
from typing import List, Optional, Set


class SupplierExhaustedError(RuntimeError):
    """Todos os valores da faixa já foram usados nesta sessão."""


class ValueSupplier:
    """
    Sorteia inteiros uniformes em [min_value, max_value], sem repetição.
    A faixa padrão (10..99) limita a sessão a 90 valores.
    """
    def __init__(self, min_value: int = 10, max_value: int = 99, seed: Optional[int] = None):
        if min_value > max_value:
            raise ValueError("min_value deve ser menor ou igual a max_value.")
        self.min_value = min_value
        self.max_value = max_value
        self.used_values: Set[int] = set()
        self.history: List[int] = []
        self._rng = random.Random(seed)

    @property
    def capacity(self) -> int:
        return self.max_value - self.min_value + 1

    @property
    def remaining(self) -> int:
        return self.capacity - len(self.used_values)

    @property
    def is_exhausted(self) -> bool:
        return self.remaining <= 0

    def next_value(self) -> int:
        """Sorteia de novo até encontrar um valor ainda não usado."""
        if self.is_exhausted:
            raise SupplierExhaustedError(
                f"Os {self.capacity} valores entre {self.min_value} e {self.max_value} já foram usados."
            )
        while True:
            value = self._rng.randint(self.min_value, self.max_value)
            if value not in self.used_values:
                break
        self.used_values.add(value)
        self.history.append(value)
        return value

    def widen(self, new_max: int):
        """Amplia a faixa para cima, preservando o histórico da sessão."""
        if new_max <= self.max_value:
            raise ValueError(f"O novo máximo deve ser maior que {self.max_value}.")
        self.max_value = new_max

    def __repr__(self):
        return f"ValueSupplier([{self.min_value}, {self.max_value}], usados={len(self.used_values)})"
