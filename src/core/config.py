from dataclasses import dataclass, replace
from typing import Optional


class Difficulty:
    FACIL = "facil"
    MEDIO = "medio"
    DIFICIL = "dificil"

    ALL = (FACIL, MEDIO, DIFICIL)

    # Cor de fundo da tela por dificuldade
    BACKGROUND_COLORS = {
        FACIL: "#c8e6c9",    # verde claro
        MEDIO: "#ffe082",    # amarelo claro
        DIFICIL: "#ffcdd2",  # vermelho claro
    }


@dataclass(frozen=True)
class GameConfig:
    """
    Constantes de uma partida.
    A pontuação segue as regras do jogo: +10/-10 na inserção, +10/-20 na rotação.
    """
    min_value: int = 10
    max_value: int = 99

    placement_reward: int = 10
    placement_penalty: int = -10
    rotation_reward: int = 10
    rotation_penalty: int = -20

    # Validação contra todos os ancestrais (desligada = só o nó alvo)
    strict_ancestors: bool = False
    show_rotation_hint: bool = True
    difficulty: str = Difficulty.FACIL
    seed: Optional[int] = None

    @property
    def background_color(self) -> str:
        return Difficulty.BACKGROUND_COLORS[self.difficulty]

    @classmethod
    def for_difficulty(cls, difficulty: str, **overrides) -> "GameConfig":
        """Dica de rotação só aparece no modo fácil."""
        if difficulty not in Difficulty.ALL:
            raise ValueError(f"Dificuldade desconhecida: {difficulty!r}")
        config = cls(difficulty=difficulty, show_rotation_hint=(difficulty == Difficulty.FACIL))
        return replace(config, **overrides) if overrides else config
