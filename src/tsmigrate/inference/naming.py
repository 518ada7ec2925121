import re

_NON_WORD = re.compile(r"[^0-9a-zA-Z]+")

FALLBACK_TYPE_NAME = "Param"

# Global types from the ES and DOM libs. An interface of the same name in a
# script file would merge into the global declaration.
GLOBAL_TYPE_NAMES = frozenset(
    {
        # ECMAScript
        "Array",
        "ArrayBuffer",
        "ArrayLike",
        "AsyncGenerator",
        "AsyncIterable",
        "AsyncIterator",
        "Atomics",
        "Awaited",
        "BigInt",
        "Boolean",
        "DataView",
        "Date",
        "Error",
        "EvalError",
        "Function",
        "Generator",
        "Intl",
        "Iterable",
        "Iterator",
        "JSON",
        "Map",
        "Math",
        "Number",
        "Object",
        "Omit",
        "Partial",
        "Pick",
        "Promise",
        "PromiseLike",
        "Proxy",
        "RangeError",
        "Readonly",
        "Record",
        "ReferenceError",
        "Reflect",
        "RegExp",
        "Required",
        "ReturnType",
        "Set",
        "SharedArrayBuffer",
        "String",
        "Symbol",
        "SyntaxError",
        "TypeError",
        "URIError",
        "WeakMap",
        "WeakRef",
        "WeakSet",
        # DOM
        "AbortController",
        "AbortSignal",
        "Animation",
        "Attr",
        "Audio",
        "Blob",
        "CSSStyleDeclaration",
        "CanvasRenderingContext2D",
        "Clipboard",
        "Comment",
        "Console",
        "Crypto",
        "CustomEvent",
        "Document",
        "DocumentFragment",
        "DOMException",
        "DOMRect",
        "Element",
        "ErrorEvent",
        "Event",
        "EventSource",
        "EventTarget",
        "File",
        "FileList",
        "FileReader",
        "FocusEvent",
        "FormData",
        "Headers",
        "History",
        "HTMLElement",
        "HTMLInputElement",
        "Image",
        "InputEvent",
        "KeyboardEvent",
        "Location",
        "MessageEvent",
        "MouseEvent",
        "MutationObserver",
        "Navigator",
        "Node",
        "NodeList",
        "Notification",
        "Option",
        "Performance",
        "PointerEvent",
        "Range",
        "Request",
        "Response",
        "Screen",
        "Selection",
        "ShadowRoot",
        "Storage",
        "StorageEvent",
        "SubmitEvent",
        "Text",
        "TextDecoder",
        "TextEncoder",
        "TouchEvent",
        "UIEvent",
        "URL",
        "URLSearchParams",
        "WebSocket",
        "WheelEvent",
        "Window",
        "Worker",
        "XMLHttpRequest",
    }
)


def to_pascal_case(text: str) -> str:
    """Convert an identifier such as ``user_info`` or ``prevProps`` into PascalCase."""
    parts = [part for part in _NON_WORD.split(text) if part]
    name = "".join(part[:1].upper() + part[1:] for part in parts)
    if not name or name[0].isdigit():
        return FALLBACK_TYPE_NAME + name
    return name


def claim_type_name(base: str, created: set[str]) -> str:
    """Return ``base`` or ``base2``, ``base3``... whichever is free, and record it in ``created``."""
    candidate = base
    suffix = 2
    while candidate in created:
        candidate = f"{base}{suffix}"
        suffix += 1
    created.add(candidate)
    return candidate
