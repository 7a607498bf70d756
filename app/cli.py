"""
app/cli.py

Command-line console for inspecting conversation memory.
- Reads user input and records each line as a turn in a local MemoryStore
- Answers with the refreshed classification (topic, mood, flow, keywords)
- Slash commands expose greeting, suggestions, history and preference updates
- `python -m app.cli transcript.txt` replays a saved "You:/Assistant:" transcript

Environment:
- CONSOLE_SESSION_ID: session to drive (default 'console')
- MEMORY_STORE_PATH: where the store persists (see core/storage.py)
- LOG_LEVEL: logging level (default WARNING)
"""

import logging
import os
import sys
from dataclasses import dataclass

from core.locale import normalize_locale
from core.memory import MemoryStore
from core.router import interaction_hints
from core.suggestions import (
    contextual_suggestions,
    language_switch_notice,
    personalized_greeting,
    starter_suggestions,
)


HELP = (
    "Commands: /greet, /suggest, /history [n], /lang <en|ar>, /name <name>, "
    "/context, /clear, exit"
)


def describe_context(memory) -> str:
    ctx = memory.conversation_context
    keywords = ", ".join(ctx.recent_keywords) or "-"
    return (
        f"topic={ctx.current_topic or '-'} mood={ctx.user_mood.value} "
        f"flow={ctx.conversation_flow.value} keywords=[{keywords}]"
    )


def parse_transcript(text):
    """Pair up 'You:' and 'Assistant:' lines from a transcript.

    A user line with no assistant reply before the next user line gets an empty reply.
    """
    turns = []
    pending = None
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("You:"):
            if pending is not None:
                turns.append((pending, ""))
            pending = line[len("You:"):].strip()
        elif line.startswith("Assistant:") and pending is not None:
            turns.append((pending, line[len("Assistant:"):].strip()))
            pending = None
    if pending is not None:
        turns.append((pending, ""))
    return turns


def replay_transcript(store, session_id, text, locale="en"):
    """Record every transcript turn into the session; return the number of turns."""
    turns = parse_transcript(text)
    for user, assistant in turns:
        store.add_interaction(session_id, user, assistant, locale, extra=interaction_hints(user))
    return len(turns)


@dataclass
class Console:
    store: MemoryStore
    session_id: str = "console"
    locale: str = "en"

    def handle(self, line: str) -> str:
        user = line.strip()
        if user.startswith("/"):
            return self.command(user)
        memory = self.store.get_memory(self.session_id)
        reply = describe_context(memory) if memory else ""
        self.store.add_interaction(self.session_id, user, reply, self.locale, extra=interaction_hints(user))
        return describe_context(self.store.get_memory(self.session_id))

    def command(self, user: str) -> str:
        name, _, arg = user.partition(" ")
        arg = arg.strip()
        if name == "/greet":
            return personalized_greeting(self.store, self.session_id, self.locale)
        if name == "/suggest":
            found = contextual_suggestions(self.store, self.session_id, self.locale)
            return "\n".join(f"- {s}" for s in (found or starter_suggestions(self.locale)))
        if name == "/history":
            count = int(arg) if arg.isdigit() else 5
            turns = self.store.recent_interactions(self.session_id, count)
            if not turns:
                return "(no history)"
            return "\n".join(f"[{t.timestamp:%H:%M}] {t.language} You: {t.user_message}" for t in turns)
        if name == "/lang":
            new = normalize_locale(arg)
            notice = language_switch_notice(self.locale, new)
            self.locale = new
            return notice or f"locale={new}"
        if name == "/name":
            if not arg:
                return "Usage: /name <name>"
            self.store.update_personal_preferences(self.session_id, {"name": arg}, self.locale)
            return f"name={arg}"
        if name == "/context":
            memory = self.store.get_memory(self.session_id)
            return describe_context(memory) if memory else "(no session yet)"
        if name == "/clear":
            self.store.clear_memory(self.session_id)
            return "cleared"
        return HELP


def main(argv=None):
    """Run the interactive console loop, or replay a transcript when a path is given."""
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())
    console = Console(MemoryStore(), os.getenv("CONSOLE_SESSION_ID", "console"))

    if argv:
        with open(argv[0], "r", encoding="utf-8") as f:
            count = replay_transcript(console.store, console.session_id, f.read(), console.locale)
        print(f"Replayed {count} turns into session '{console.session_id}'.")
        print(console.command("/context"))
        return

    print("Memory console (type 'exit' to quit)\n")
    print(personalized_greeting(console.store, console.session_id, console.locale))
    while True:
        raw = input("You: ")
        user = raw.replace("You:", "").strip()
        if not user:
            continue
        if user.lower() in {"exit", "quit"}:
            print("Bye!")
            break
        print(f"Assistant: {console.handle(user)}\n")


if __name__ == "__main__":
    main()
