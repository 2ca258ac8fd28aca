# src/ui/game_gui.py
import tkinter as tk
from tkinter import scrolledtext, messagebox, simpledialog
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from src.core.config import Difficulty, GameConfig
from src.core.structures.avl_tree import Slot
from src.core.algorithms.balancing import RotationKind
from src.core.algorithms.placement import RejectionReason
from src.core.game.engine import ChallengeEngine, GameState
from src.core.game.events import EventType
from src.core.game.renderer import QueuedRenderer
from src.core.game.session import Session


class TetrisTreeApp:
    """
    Interface tkinter do Tetris Tree.
    O motor avisa por uma fila de eventos (QueuedRenderer); a tela drena a
    fila no seu próprio ritmo, então as animações nunca seguram o motor.
    """
    POLL_MS = 50
    DROP_STEP_MS = 20
    DROP_TARGET_Y = 60
    LEVEL_HEIGHT = 90
    NODE_RADIUS = 22

    REASON_TEXT = {
        RejectionReason.INVALID_ORDERING: "ordem inválida",
        RejectionReason.DUPLICATE_KEY: "valor igual ao do nó",
    }

    def __init__(self, root):
        self.root = root
        self.root.title("Tetris Tree")
        self.root.minsize(1000, 700)
        self.root.geometry("1000x700")

        self.engine = None
        self.renderer = None
        self.config = None
        self.snapshot = None
        self.falling_value = None
        self.falling_y = 0
        self.animating = False
        self.awaiting_rotation = False
        self.rotation_buttons = {}

        self.game_id = 0
        self.difficulty_var = tk.StringVar(value=Difficulty.FACIL)
        self.current_frame = None
        self.show_menu()

    # --- Telas ---

    def _switch_frame(self, frame):
        if self.current_frame is not None:
            self.current_frame.destroy()
        self.current_frame = frame
        frame.pack(fill=tk.BOTH, expand=True)

    def show_menu(self):
        """Tela inicial: título, dificuldade e botão de jogar."""
        self.engine = None
        self.renderer = None
        bg = Difficulty.BACKGROUND_COLORS[self.difficulty_var.get()]
        frame = tk.Frame(self.root, bg=bg)
        self._switch_frame(frame)

        tk.Label(frame, text="TETRIS TREE", font=("Segoe UI", 40, "bold"), fg="#ff9800", bg=bg).pack(pady=(120, 40))

        frame_diff = tk.LabelFrame(frame, text="Dificuldade", bg=bg, font=("Arial", 10, "bold"))
        frame_diff.pack(pady=10)
        labels = {Difficulty.FACIL: "Fácil", Difficulty.MEDIO: "Médio", Difficulty.DIFICIL: "Difícil"}
        for diff in Difficulty.ALL:
            tk.Radiobutton(frame_diff, text=labels[diff], value=diff, variable=self.difficulty_var,
                           bg=bg, command=self.show_menu).pack(side=tk.LEFT, padx=10, pady=5)

        tk.Button(frame, text="▶ JOGAR", font=("Segoe UI", 20, "bold"), bg="#4caf50", fg="#fff",
                  padx=20, pady=10, command=self.start_game).pack(pady=40)

    def start_game(self):
        self.config = GameConfig.for_difficulty(self.difficulty_var.get())
        self.renderer = QueuedRenderer()
        self.engine = ChallengeEngine(Session.new(self.config), self.renderer)
        self.snapshot = None
        self.falling_value = None
        self.animating = False
        self.awaiting_rotation = False

        self.create_game_layout()
        self.engine.start()
        self.game_id += 1
        self.root.after(self.POLL_MS, self.poll_events, self.game_id)

    def create_game_layout(self):
        bg = self.config.background_color
        frame = tk.Frame(self.root, bg=bg)
        self._switch_frame(frame)

        self.canvas = tk.Canvas(frame, bg=bg, highlightthickness=0)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.canvas.bind("<Configure>", lambda e: self.draw_tree())

        sidebar = tk.Frame(frame, width=200, bg="#e8e8e8")
        sidebar.pack(side=tk.RIGHT, fill=tk.Y)

        self.lbl_score = tk.Label(sidebar, text="0", font=("Segoe UI", 24, "bold"), fg="#00aa00", bg="#e8e8e8")
        self.lbl_score.pack(pady=10)

        frame_rot = tk.LabelFrame(sidebar, text="Rotações", bg="#e8e8e8", font=("Arial", 9, "bold"))
        frame_rot.pack(fill=tk.X, padx=10, pady=5)
        self.rotation_buttons = {}
        for kind in RotationKind.ALL:
            btn = tk.Button(frame_rot, text=kind, width=6, font=("Segoe UI", 14), bg="#333", fg="#fff",
                            state=tk.DISABLED, command=lambda k=kind: self.choose_rotation(k))
            btn.pack(pady=3)
            self.rotation_buttons[kind] = btn

        self.lbl_status = tk.Label(sidebar, text="", font=("Arial", 9), bg="#e8e8e8", wraplength=180, justify=tk.LEFT)
        self.lbl_status.pack(fill=tk.X, padx=10, pady=5)

        self.lbl_metrics = tk.Label(sidebar, text="", font=("Consolas", 9), bg="#e8e8e8", justify=tk.LEFT)
        self.lbl_metrics.pack(anchor="w", padx=10)

        self.log_console = scrolledtext.ScrolledText(sidebar, width=26, height=12, font=("Consolas", 8))
        self.log_console.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        tk.Button(sidebar, text="🔙 Voltar", bg="#2196f3", fg="#fff", command=self.show_menu).pack(pady=10)

    # --- Fila de eventos ---

    def poll_events(self, game_id):
        if self.renderer is None or game_id != self.game_id:
            return  # partida encerrada
        # Enquanto o número cai, os eventos seguintes esperam na fila
        while self.renderer is not None and not self.animating and not self.renderer.queue.is_empty():
            self.handle_event(self.renderer.queue.dequeue())
        self.update_dashboard()
        self.root.after(self.POLL_MS, self.poll_events, game_id)

    def handle_event(self, event):
        p = event.payload
        if event.event_type == EventType.TREE_CHANGED:
            self.snapshot = p['snapshot']
            self.draw_tree()
        elif event.event_type == EventType.VALUE_READY:
            self.drop_value(p['value'])
        elif event.event_type == EventType.PLACEMENT_RESULT:
            if p['accepted']:
                self.set_status("Boa! Valor inserido.", "#006600")
            else:
                self.set_status(f"Inserção inválida ({self.REASON_TEXT.get(p['reason'], p['reason'])}).", "#aa0000")
            self.falling_value = None
            self.draw_tree()
        elif event.event_type == EventType.IMBALANCE_DETECTED:
            self.awaiting_rotation = True
            self.prompt_rotation(p['kind'], p['node_key'])
        elif event.event_type == EventType.ROTATION_RESULT:
            if p['correct']:
                self.awaiting_rotation = False
                self.set_rotation_buttons(False)
                self.set_status("Rotação correta!", "#006600")
            else:
                self.set_status("Rotação errada, tente de novo.", "#aa0000")
        elif event.event_type == EventType.SCORE_CHANGED:
            self.lbl_score.config(text=str(p['total']))
        elif event.event_type == EventType.SUPPLIER_EXHAUSTED:
            self.ask_widen_range()

    # --- Número caindo ---

    def drop_value(self, value):
        self.falling_value = value
        self.falling_y = 0
        self.animating = True
        self._animate_drop()

    def _animate_drop(self):
        if self.renderer is None:
            return
        self.falling_y += 5
        if self.falling_y >= self.DROP_TARGET_Y:
            self.falling_y = self.DROP_TARGET_Y
            self.animating = False
        self.draw_tree()
        if self.animating:
            self.root.after(self.DROP_STEP_MS, self._animate_drop)

    # --- Desenho ---

    def _layout(self):
        """Posição de cada chave: x pela ordem in-order, y pela profundidade."""
        positions = {}
        width = max(self.canvas.winfo_width(), 400)
        order = []

        def walk(node, depth):
            if node is None:
                return
            walk(node['left'], depth + 1)
            order.append((node['key'], depth))
            walk(node['right'], depth + 1)

        walk(self.snapshot, 0)
        step = width / (len(order) + 1)
        for i, (key, depth) in enumerate(order):
            positions[key] = ((i + 1) * step, 130 + depth * self.LEVEL_HEIGHT)
        return positions, step

    def draw_tree(self):
        if self.engine is None or self.snapshot is None:
            return
        self.canvas.delete("all")
        positions, step = self._layout()
        r = self.NODE_RADIUS

        def draw_edges(node):
            for child in (node['left'], node['right']):
                if child is not None:
                    x1, y1 = positions[node['key']]
                    x2, y2 = positions[child['key']]
                    self.canvas.create_line(x1, y1, x2, y2, fill="#ffffff", width=2)
                    draw_edges(child)

        if self.snapshot['key'] is not None:
            draw_edges(self.snapshot)

        for key, (x, y) in positions.items():
            if key is None:
                continue
            self.canvas.create_oval(x - r, y - r, x + r, y + r, fill="#4caf50", outline="#2e7d32")
            self.canvas.create_text(x, y, text=str(key), fill="#fff", font=("Segoe UI", 12, "bold"))

        # Vagas livres só aparecem com um valor em jogo e sem rotação pendente
        if self.falling_value is not None and not self.awaiting_rotation:
            offset = min(step / 2, 60)
            for node, slot in self.engine.tree.empty_slots():
                if slot == Slot.ROOT:
                    x, y = positions.get(None, (self.canvas.winfo_width() / 2, 130))
                elif node.key not in positions:
                    continue  # snapshot ainda não chegou da fila
                else:
                    px, py = positions[node.key]
                    x = px - offset if slot == Slot.LEFT else px + offset
                    y = py + self.LEVEL_HEIGHT * 0.6
                self._draw_plus(x, y, node, slot)

        if self.falling_value is not None:
            cx = self.canvas.winfo_width() / 2
            self.canvas.create_rectangle(cx - 25, self.falling_y - 18, cx + 25, self.falling_y + 18,
                                         fill="#f44336", outline="")
            self.canvas.create_text(cx, self.falling_y, text=str(self.falling_value), fill="#fff",
                                    font=("Segoe UI", 16, "bold"))

    def _draw_plus(self, x, y, node, slot):
        tag = f"slot_{id(node)}_{slot}"
        self.canvas.create_rectangle(x - 14, y - 14, x + 14, y + 14, fill="#2196f3", outline="", tags=tag)
        self.canvas.create_text(x, y, text="+", fill="#fff", font=("Segoe UI", 16, "bold"), tags=tag)
        self.canvas.tag_bind(tag, "<Button-1>", lambda e, n=node, s=slot: self.place_value(n, s))

    # --- Ações do jogador ---

    def place_value(self, node, slot):
        if self.animating or self.engine.state != GameState.VALUE_DROPPED:
            return
        # Só o número que está na tela; o próximo ainda está na fila de eventos
        value = self.falling_value
        if value is None or value != self.engine.pending_value:
            return
        self.falling_value = None
        self.engine.submit_placement(value, node, slot)

    def choose_rotation(self, kind):
        if not self.awaiting_rotation:
            return
        self.engine.submit_rotation_choice(kind)

    def prompt_rotation(self, kind, node_key):
        if self.config.show_rotation_hint:
            messagebox.showinfo("Desbalanceamento",
                                f"O nó {node_key} está desbalanceado. Rotação {kind} necessária.")
        else:
            self.set_status(f"O nó {node_key} está desbalanceado. Qual rotação?", "#aa5500")
        self.set_rotation_buttons(True)
        self.draw_tree()

    def set_rotation_buttons(self, enabled):
        for btn in self.rotation_buttons.values():
            btn.config(state=tk.NORMAL if enabled else tk.DISABLED)

    def ask_widen_range(self):
        current = self.engine.session.supplier.max_value
        new_max = simpledialog.askinteger(
            "Valores esgotados",
            f"Todos os valores até {current} foram usados.\nNovo valor máximo (cancelar encerra):",
            minvalue=current + 1,
        )
        if new_max is None:
            self.show_menu()
        else:
            self.engine.widen_value_range(new_max)

    def set_status(self, text, color="#000"):
        self.lbl_status.config(text=text, fg=color)

    def update_dashboard(self):
        if self.engine is None:
            return
        m = self.engine.get_metrics()
        self.lbl_metrics.config(text=(
            f"Nós: {m['nodes']}  Altura: {m['height']}\n"
            f"Inserções: {m['placements']}  Erros: {m['rejections']}\n"
            f"Rotações: {m['rotations']}  Erros: {m['wrong_rotations']}\n"
            f"Valores restantes: {m['values_left']}"
        ))
        self.log_console.delete(1.0, tk.END)
        for msg in reversed(self.engine.logs):
            self.log_console.insert(tk.END, msg + "\n")


if __name__ == "__main__": root = tk.Tk(); app = TetrisTreeApp(root); root.mainloop()
