from typing import Any, Dict, List, Optional, Tuple

from src.core.structures.avl_tree import AVLNode, Slot, ensure_slot_free, place_at
from src.core.algorithms.balancing import BalanceAnalyzer, RotationKind
from src.core.algorithms.placement import PlacementResult, PlacementValidator
from src.core.io.value_supplier import SupplierExhaustedError
from src.core.game.renderer import GameRenderer
from src.core.game.session import PendingRotation, Session


class IllegalActionError(RuntimeError):
    """Ação do jogador recebida num estado que não a permite."""


class GameState:
    READY_FOR_VALUE = "PRONTO_PARA_VALOR"
    VALUE_DROPPED = "VALOR_LANCADO"
    AWAITING_ROTATION = "AGUARDANDO_ROTACAO"


class ChallengeEngine:
    """
    O Maestro do Tetris Tree.
    Recebe as ações do jogador (inserção e escolha de rotação), aplica as
    regras sobre a árvore da sessão, atualiza o placar e avisa a interface.

    Cada ação é uma transição completa e síncrona: a árvore, o placar e o
    estado já estão atualizados quando o primeiro gancho é chamado.
    """
    MAX_LOGS = 50

    def __init__(self, session: Session, renderer: Optional[GameRenderer] = None):
        self.session = session
        self.validator = PlacementValidator(strict_ancestors=session.config.strict_ancestors)
        self.renderers: List[GameRenderer] = []
        if renderer is not None:
            self.renderers.append(renderer)

        self.state = GameState.READY_FOR_VALUE
        self.started = False
        self.logs: List[str] = []
        self.stats = {
            'placements': 0,
            'rejections': 0,
            'rotations': 0,
            'wrong_rotations': 0,
        }

    # --- Atalhos para o estado da sessão ---

    @property
    def tree(self):
        return self.session.tree

    @property
    def score(self) -> int:
        return self.session.score.total

    @property
    def pending_value(self) -> Optional[int]:
        return self.session.pending_value

    @property
    def pending_rotation(self) -> Optional[PendingRotation]:
        return self.session.pending_rotation

    def add_renderer(self, renderer: GameRenderer):
        self.renderers.append(renderer)

    # --- Ciclo de jogo ---

    def start(self):
        """
        Mostra a árvore da sessão (normalmente só a raiz vazia) e lança o
        primeiro valor. Uma árvore já desbalanceada exige rotação antes.
        """
        if self.started:
            raise IllegalActionError("A partida já foi iniciada.")
        self.started = True
        self.log("Partida iniciada.")
        notices = [('on_tree_changed', (self.tree.snapshot(),))]
        self._after_structural_change(notices)
        self._emit(notices)

    def request_next_value(self) -> int:
        """
        Pedido explícito de valor. Só é aceito em PRONTO_PARA_VALOR;
        enquanto houver rotação pendente nenhum valor novo é liberado.
        Propaga SupplierExhaustedError se a faixa acabou.
        """
        self._require_started()
        if self.state != GameState.READY_FOR_VALUE:
            raise IllegalActionError(f"Nenhum valor novo no estado {self.state}.")
        value = self.session.supplier.next_value()
        self._drop_value(value)
        self._emit([('on_value_ready', (value,))])
        return value

    def widen_value_range(self, new_max: int):
        """Amplia a faixa esgotada e retoma o jogo, se estava parado por isso."""
        self.session.supplier.widen(new_max)
        self.log(f"Faixa de valores ampliada até {new_max}.")
        if self.started and self.state == GameState.READY_FOR_VALUE:
            notices = []
            self._auto_request_value(notices)
            self._emit(notices)

    def submit_placement(self, value: int, target: AVLNode, slot: str) -> PlacementResult:
        """
        Tenta colocar o valor pendente na vaga (target, slot).
        Rejeição: penalidade e um valor NOVO (o rejeitado é descartado).
        Aceite: insere, pontua e procura desbalanceamento.
        """
        self._require_started()
        if self.state != GameState.VALUE_DROPPED:
            raise IllegalActionError(f"Inserção não permitida no estado {self.state}.")
        if value != self.session.pending_value:
            raise IllegalActionError(f"O valor em jogo é {self.session.pending_value}, não {value}.")

        path = self.tree.path_to(target)
        if path is None:
            raise IllegalActionError(f"O nó {target.key} não pertence à árvore.")
        ensure_slot_free(target, slot)

        config = self.session.config
        result = self.validator.validate(target, slot, value, ancestors=path)
        self.session.pending_value = None
        notices = []

        if not result.accepted:
            self.stats['rejections'] += 1
            total = self.session.score.add(config.placement_penalty)
            self.log(f"Inserção rejeitada: {value} em {slot} de {target.key} ({result.reason}).")
            self.state = GameState.READY_FOR_VALUE
            notices.append(('on_placement_result', (False, result.reason)))
            notices.append(('on_score_changed', (total,)))
            self._auto_request_value(notices)
            self._emit(notices)
            return result

        place_at(target, slot, value)
        self.stats['placements'] += 1
        total = self.session.score.add(config.placement_reward)
        where = "na raiz" if slot == Slot.ROOT else f"em {slot} de {target.key}"
        self.log(f"Valor {value} inserido {where}.")

        notices.append(('on_tree_changed', (self.tree.snapshot(),)))
        notices.append(('on_placement_result', (True, None)))
        notices.append(('on_score_changed', (total,)))
        self._after_structural_change(notices)
        self._emit(notices)
        return result

    def submit_rotation_choice(self, kind: str) -> bool:
        """
        Resposta do jogador ao desbalanceamento.
        Errou: penalidade e continua aguardando (tentativas ilimitadas).
        Acertou: rotaciona, religa o pai e reavalia a árvore inteira.
        """
        self._require_started()
        if self.state != GameState.AWAITING_ROTATION:
            raise IllegalActionError(f"Nenhuma rotação pendente no estado {self.state}.")
        if kind not in RotationKind.ALL:
            raise ValueError(f"Tipo de rotação desconhecido: {kind!r}")

        config = self.session.config
        pending = self.session.pending_rotation
        notices = []

        if kind != pending.kind:
            self.stats['wrong_rotations'] += 1
            total = self.session.score.add(config.rotation_penalty)
            self.log(f"Rotação {kind} incorreta para o nó {pending.node.key}.")
            notices.append(('on_rotation_result', (False,)))
            notices.append(('on_score_changed', (total,)))
            self._emit(notices)
            return False

        pivot = pending.node
        parent = self.tree.find_parent(pivot)
        new_root = BalanceAnalyzer.rotate(pivot, kind)
        self.tree.replace_subtree(pivot, new_root, parent)
        self.session.pending_rotation = None
        self.stats['rotations'] += 1
        total = self.session.score.add(config.rotation_reward)
        self.log(f"Rotação {kind} aplicada no nó {pivot.key}; nova raiz da subárvore: {new_root.key}.")

        notices.append(('on_rotation_result', (True,)))
        notices.append(('on_tree_changed', (self.tree.snapshot(),)))
        notices.append(('on_score_changed', (total,)))
        self._after_structural_change(notices)
        self._emit(notices)
        return True

    # --- Internos ---

    def _after_structural_change(self, notices: List[Tuple[str, tuple]]):
        """Reavalia a árvore; a rotação pode revelar outro desbalanceamento acima."""
        node, kind = BalanceAnalyzer.find_imbalance(self.tree.root)
        if kind:
            self.session.pending_rotation = PendingRotation(node=node, kind=kind)
            self.state = GameState.AWAITING_ROTATION
            self.log(f"Nó {node.key} desbalanceado: rotação {kind} necessária.")
            notices.append(('on_imbalance_detected', (kind, node)))
        else:
            self.state = GameState.READY_FOR_VALUE
            self._auto_request_value(notices)

    def _auto_request_value(self, notices: List[Tuple[str, tuple]]):
        try:
            value = self.session.supplier.next_value()
        except SupplierExhaustedError as e:
            self.state = GameState.READY_FOR_VALUE
            self.log(f"Valores esgotados: {e}")
            notices.append(('on_supplier_exhausted', ()))
            return
        self._drop_value(value)
        notices.append(('on_value_ready', (value,)))

    def _drop_value(self, value: int):
        self.session.pending_value = value
        self.state = GameState.VALUE_DROPPED
        self.log(f"Novo valor lançado: {value}")

    def _require_started(self):
        if not self.started:
            raise IllegalActionError("A partida ainda não foi iniciada.")

    def _emit(self, notices: List[Tuple[str, tuple]]):
        for hook, args in notices:
            for renderer in self.renderers:
                getattr(renderer, hook)(*args)

    def get_metrics(self) -> Dict[str, Any]:
        """Dados para o painel lateral."""
        return {
            'score': self.score,
            'nodes': self.tree.size(),
            'height': self.tree.height(),
            'state': self.state,
            'pending_value': self.session.pending_value,
            'values_left': self.session.supplier.remaining,
            **self.stats,
        }

    def log(self, msg: str):
        print(msg)
        self.logs.append(msg)
        # Mantém apenas os últimos logs na memória da UI
        if len(self.logs) > self.MAX_LOGS:
            self.logs.pop(0)
