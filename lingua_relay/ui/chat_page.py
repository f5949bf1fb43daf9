"""NiceGUI chat client with conversation history and document upload."""

import os
import re
from typing import Any

import httpx
from nicegui import app, events, ui

from lingua_relay.parsing.uploads import MAX_UPLOAD_SIZE
from lingua_relay.prompts import SUPPORTED_LANGUAGES
from lingua_relay.ui.state import ConversationStore, FileInfo, Message

API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '5000')}")
STORAGE_KEY = "conversations"
REQUEST_TIMEOUT = 60.0

LANGUAGE_LABELS = {
    "Chinese": "中文",
    "English": "English",
    "Spanish": "Español",
    "French": "Français",
    "German": "Deutsch",
    "Japanese": "日本語",
    "Korean": "한국어",
    "Russian": "Русский",
}

CHAT_ERROR_TEXT = "Sorry, something went wrong with the chat. Please try again."


class ApiClientError(Exception):
    """Raised when the backend returns an error envelope or is unreachable."""

    pass


def markdown_to_html(text: str) -> str:
    """Convert a small markdown subset to HTML for bot messages.

    Supports: bold, italic, inline code, code blocks.
    """
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    text = re.sub(
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-zinc-900 text-zinc-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
        text,
    )
    text = re.sub(r"`([^`]+)`", r'<code class="bg-zinc-600 px-1 rounded text-xs">\1</code>', text)
    text = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", text)
    text = re.sub(r"\*([^*]+)\*", r"<em>\1</em>", text)

    return text.replace("\n", "<br>")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return f"HTTP {response.status_code}"
    return str(body.get("message") or body.get("error") or f"HTTP {response.status_code}")


async def request_chat(
    message: str,
    language: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Send a message to /api/chat and return the reply text."""
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
        try:
            response = await client.post(
                f"{API_BASE_URL}/api/chat",
                json={"message": message, "language": language},
            )
        except httpx.RequestError as e:
            raise ApiClientError(f"Connection failed: {e}") from e

    if response.is_error:
        raise ApiClientError(_error_message(response))
    return response.json().get("response") or ""


async def request_translation(
    content: bytes,
    filename: str,
    content_type: str,
    language: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Upload a document to /api/translate and return the result payload."""
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT, transport=transport) as client:
        try:
            response = await client.post(
                f"{API_BASE_URL}/api/translate",
                files={"file": (filename, content, content_type or "application/octet-stream")},
                data={"targetLanguage": language},
            )
        except httpx.RequestError as e:
            raise ApiClientError(f"Connection failed: {e}") from e

    if response.is_error:
        raise ApiClientError(_error_message(response))
    return response.json()


def load_store() -> ConversationStore:
    return ConversationStore.load(app.storage.user.get(STORAGE_KEY))


def save_store(store: ConversationStore) -> None:
    app.storage.user[STORAGE_KEY] = store.dump()


CUSTOM_CSS = """
<style>
    body { background: #18181b; color: #f4f4f5; }
    .message-user { background: #2563eb; color: white; border-radius: 16px 16px 4px 16px; }
    .message-bot { background: #3f3f46; color: #f4f4f5; border-radius: 16px 16px 16px 4px; }
    .conversation-active { background: #3f3f46; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    store = load_store()

    sidebar: ui.column
    messages_container: ui.column
    header: ui.row
    input_field: ui.textarea
    send_btn: ui.button

    def persist_and_refresh() -> None:
        save_store(store)
        refresh_sidebar()
        refresh_header()
        refresh_messages()

    def new_chat() -> None:
        store.create_conversation()
        persist_and_refresh()

    def select_chat(conversation_id: str) -> None:
        store.select(conversation_id)
        persist_and_refresh()

    def copy_chat(conversation_id: str) -> None:
        store.copy_conversation(conversation_id)
        persist_and_refresh()

    def delete_chat(conversation_id: str) -> None:
        store.delete_conversation(conversation_id)
        persist_and_refresh()

    def delete_message(message_id: str) -> None:
        if store.current is not None:
            store.delete_message(store.current.id, message_id)
            persist_and_refresh()

    def change_language(e: events.ValueChangeEventArguments) -> None:
        if store.current is not None and e.value:
            store.set_language(store.current.id, e.value)
            save_store(store)

    def refresh_sidebar() -> None:
        sidebar.clear()
        with sidebar:
            for conversation in store.conversations:
                active = "conversation-active" if conversation.id == store.current_id else ""
                with ui.row().classes(f"w-full items-center rounded px-2 py-1 {active}"):
                    ui.icon("chat").classes("text-zinc-400")
                    ui.label(conversation.title).classes(
                        "flex-grow truncate cursor-pointer text-sm"
                    ).on("click", lambda _, cid=conversation.id: select_chat(cid))
                    ui.button(
                        icon="content_copy", on_click=lambda _, cid=conversation.id: copy_chat(cid)
                    ).props("flat dense round size=sm color=grey")
                    ui.button(
                        icon="delete", on_click=lambda _, cid=conversation.id: delete_chat(cid)
                    ).props("flat dense round size=sm color=red")

    def refresh_header() -> None:
        header.clear()
        current = store.current
        with header:
            if current is None:
                ui.label("Select or start a conversation").classes("text-lg text-zinc-400")
                return
            ui.label(current.title).classes("text-lg font-semibold flex-grow")
            ui.select(
                {lang: LANGUAGE_LABELS.get(lang, lang) for lang in SUPPORTED_LANGUAGES},
                value=current.language,
                on_change=change_language,
            ).props("dense outlined dark").classes("w-40")

    def render_message(msg: Message) -> None:
        is_user = msg.sender == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-bot"

        with ui.row().classes(f"w-full {align} gap-2 items-end"):
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        content = msg.content.replace("&", "&amp;").replace("<", "&lt;")
                        content = content.replace("\n", "<br>")
                    else:
                        content = markdown_to_html(msg.content)
                    ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
                with ui.row().classes("items-center gap-1"):
                    ui.label(msg.timestamp.strftime("%I:%M %p")).classes(
                        "text-[10px] text-zinc-400"
                    )
                    ui.button(
                        icon="content_copy",
                        on_click=lambda _, text=msg.content: ui.clipboard.write(text),
                    ).props("flat dense round size=xs color=grey")
                    ui.button(
                        icon="delete", on_click=lambda _, mid=msg.id: delete_message(mid)
                    ).props("flat dense round size=xs color=grey")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            current = store.current
            if current is None or not current.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-zinc-600")
                    ui.label("Start a conversation").classes("text-lg text-zinc-500")
                return
            for msg in current.messages:
                render_message(msg)

    async def send_message() -> None:
        current = store.current
        text = input_field.value or ""
        if not text.strip() or current is None:
            return

        input_field.value = ""
        send_btn.disable()
        store.add_message(current.id, text, "user")
        persist_and_refresh()

        try:
            reply = await request_chat(text, current.language)
        except ApiClientError as e:
            ui.notify(str(e), type="negative")
            reply = CHAT_ERROR_TEXT
        finally:
            send_btn.enable()

        # The conversation may have been deleted while the request was pending
        if store.find(current.id) is None:
            ui.notify("Conversation was deleted before the reply arrived", type="warning")
            return

        store.add_message(current.id, reply, "bot")
        persist_and_refresh()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        current = store.current
        if current is None:
            ui.notify("Start a conversation first", type="warning")
            return

        content = await e.file.read()
        file_info = FileInfo(name=e.file.name, size=len(content), type=e.file.content_type)

        try:
            data = await request_translation(
                content, e.file.name, e.file.content_type, current.language
            )
        except ApiClientError as err:
            ui.notify(str(err), type="negative")
            if store.find(current.id) is not None:
                store.add_message(current.id, f"Error processing file: {err}", "bot")
                persist_and_refresh()
            return

        if store.find(current.id) is None:
            ui.notify("Conversation was deleted before the translation arrived", type="warning")
            return

        store.add_message(
            current.id,
            f"Uploaded file: {e.file.name}\n\n{data.get('originalText', '')}",
            "user",
            file_info=file_info,
        )
        store.add_message(
            current.id,
            f"Translation ({data.get('language', current.language)}):\n\n"
            f"{data.get('translatedText', '')}",
            "bot",
        )
        persist_and_refresh()

    # === UI Layout ===
    with ui.row().classes("w-full h-screen no-wrap gap-0"):
        with ui.column().classes("w-64 h-full bg-zinc-800 p-3 gap-2"):
            ui.button("New Chat", icon="add", on_click=new_chat).props(
                "unelevated color=primary"
            ).classes("w-full")
            sidebar = ui.column().classes("w-full gap-1")

        with ui.column().classes("flex-grow h-full gap-0"):
            header = ui.row().classes("w-full items-center px-5 py-3 border-b border-zinc-700")

            with (
                ui.scroll_area().classes("flex-grow w-full"),
                ui.column().classes("w-full p-5"),
            ):
                messages_container = ui.column().classes("w-full gap-4")

            with ui.row().classes("w-full p-4 gap-3 items-end border-t border-zinc-700"):
                ui.upload(
                    on_upload=handle_upload,
                    auto_upload=True,
                    max_files=1,
                    max_file_size=MAX_UPLOAD_SIZE,
                ).props('accept=".pdf,.txt" flat dense dark label="Upload PDF/TXT"').classes(
                    "w-48"
                )
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow outlined dense dark rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated color=primary"
                )

    refresh_sidebar()
    refresh_header()
    refresh_messages()
