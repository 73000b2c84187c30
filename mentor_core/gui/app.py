import tkinter as tk
from tkinter import scrolledtext
from tkinter import ttk

from mentor_core.client.session import MentorSession
from mentor_core.domain.models import Mode
from mentor_core.gui import worker
from mentor_core.prompts.modes import MODE_PROFILES


class App:
    def __init__(self, root, session=None):
        self.root = root
        self.root.title("AI Career Mentor Agent")
        self.session = session or MentorSession()
        self.labels = {p.label: mode for mode, p in MODE_PROFILES.items()}
        form = tk.Frame(root)
        form.pack(fill=tk.X, padx=8, pady=8)
        self.skills = self._mk_labeled_entry(form, "Your Skills")
        self.interests = self._mk_labeled_entry(form, "Your Interests")
        tk.Label(form, text="Your Career Goals").pack(anchor=tk.W)
        self.goals = tk.Text(form, height=3)
        self.goals.pack(fill=tk.X)
        tk.Label(form, text="Roadmap Type").pack(anchor=tk.W)
        self.mode = ttk.Combobox(form, values=list(self.labels), state="readonly")
        self.mode.current(0)
        self.mode.pack(fill=tk.X)
        self.send_btn = tk.Button(form, text="Generate", command=self.on_send)
        self.send_btn.pack(fill=tk.X, pady=4)
        self.error = tk.Label(root, text="", fg="#d93025", anchor=tk.W, justify=tk.LEFT)
        self.error.pack(fill=tk.X, padx=8)
        res = tk.LabelFrame(root, text="Your Career Roadmap")
        res.pack(fill=tk.BOTH, expand=True, padx=8)
        tk.Button(res, text="Copy to Clipboard", command=self.on_copy).pack(anchor=tk.E)
        self.result = scrolledtext.ScrolledText(res, height=14)
        self.result.pack(fill=tk.BOTH, expand=True)
        hist = tk.LabelFrame(root, text="Chat History")
        hist.pack(fill=tk.BOTH, expand=True, padx=8, pady=8)
        self.chat = scrolledtext.ScrolledText(hist, height=12)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("user", foreground="#1a73e8")
        self.chat.tag_config("assistant", foreground="#34a853")
        follow = tk.Frame(hist)
        follow.pack(fill=tk.X, pady=(4, 0))
        self.follow_up = tk.Entry(follow, state=tk.DISABLED)
        self.follow_up.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.follow_up.bind("<Return>", lambda e: self.on_ask())
        self.ask_btn = tk.Button(follow, text="Ask", command=self.on_ask, state=tk.DISABLED)
        self.ask_btn.pack(side=tk.RIGHT)
        self.status = tk.Label(root, text="Ready")
        self.status.pack(fill=tk.X)

    def _mk_labeled_entry(self, parent, label):
        tk.Label(parent, text=label).pack(anchor=tk.W)
        ent = tk.Entry(parent)
        ent.pack(fill=tk.X)
        return ent

    def _selected_mode(self) -> Mode:
        return self.labels.get(self.mode.get(), Mode.CAREER)

    def _begin(self):
        self.session.loading = True
        self.send_btn.config(state=tk.DISABLED, text="Generating...")
        self.ask_btn.config(state=tk.DISABLED)
        self.error.config(text="")
        self.status.config(text="Sending...")

    def on_send(self):
        if self.session.loading:
            return
        skills = self.skills.get().strip()
        interests = self.interests.get().strip()
        goals = self.goals.get("1.0", tk.END).strip()
        if not (skills and interests and goals):
            self.error.config(text="Please fill in skills, interests and goals.")
            return
        mode = self._selected_mode()
        self._begin()
        worker.start(self.root, lambda: self.session.submit(skills, interests, goals, mode), self.on_response)

    def on_ask(self):
        if self.session.loading or not len(self.session.history):
            return
        text = self.follow_up.get().strip()
        if not text:
            return
        mode = self._selected_mode()
        self._begin()
        self.follow_up.delete(0, tk.END)
        worker.start(self.root, lambda: self.session.ask(text, mode), self.on_response)

    def on_response(self, text, err):
        self.session.loading = False
        if err:
            self.error.config(text=err.message)
            self.status.config(text="Error")
        else:
            self.result.delete(1.0, tk.END)
            self.result.insert(tk.END, text)
            self.skills.delete(0, tk.END)
            self.interests.delete(0, tk.END)
            self.goals.delete("1.0", tk.END)
            tokens = self.session.last_metadata.get("tokens_used")
            self.status.config(text=f"tokens: {tokens}" if tokens else "Done")
        self.render_history()
        self.send_btn.config(state=tk.NORMAL, text="Generate")
        can_ask = tk.NORMAL if len(self.session.history) else tk.DISABLED
        self.follow_up.config(state=can_ask)
        self.ask_btn.config(state=can_ask)

    def render_history(self):
        self.chat.delete(1.0, tk.END)
        for turn in self.session.history:
            who = "You" if turn.role == "user" else "AI"
            self.chat.insert(tk.END, f"{who}: {turn.content}\n\n", turn.role)
        self.chat.see(tk.END)

    def on_copy(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.session.last_result)


def main():
    root = tk.Tk()
    App(root)
    root.mainloop()


if __name__ == "__main__":
    main()
