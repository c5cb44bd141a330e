"""Run code snippets through an online compiler service."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.parse
import urllib.request

API_URL = "https://tool.runoob.com/compile2.php"
API_TOKEN = os.environ.get("RUNCODE_TOKEN", "token")
DEFAULT_TIMEOUT = 15.0
MAX_LINES = 30
MAX_CHARS = 1000
TRUNCATION = "\n............\n............"
UNSUPPORTED = "语言不是受支持的编程语种呢~"

_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Referer": "https://c.runoob.com/",
    "User-Agent": "Mozilla/5.0 (Windows NT 6.1; Win64; x64; rv:87.0) Gecko/20100101 Firefox/87.0",
}

_CPP = "#include <iostream>\nusing namespace std;\n\nint main()\n{\n   cout << \"Hello World\";\n   return 0;\n}"
_CS = (
    "using System;\nnamespace HelloWorldApplication\n{\n   class HelloWorld\n   {\n"
    "      static void Main(string[] args)\n      {\n"
    "         Console.WriteLine(\"Hello World!\");\n      }\n   }\n}"
)
_JS = "console.log(\"Hello World!\");"
_RUST = "fn main() {\n    println!(\"Hello World!\");\n}"
_SHELL = "echo 'Hello World!'"
_PY3 = "print(\"Hello, World!\")"
_KOTLIN = "fun main(args : Array<String>){\n    println(\"Hello World!\")\n}"
_TS = "const hello : string = \"Hello World!\"\nconsole.log(hello)"
_RUBY = "puts \"Hello World!\";"
_SWIFT = "var myString = \"Hello, World!\"\nprint(myString)"

TEMPLATES: dict[str, str] = {
    "py2": "print 'Hello World!'",
    "ruby": _RUBY,
    "rb": _RUBY,
    "php": "<?php\n\techo 'Hello World!';\n?>",
    "javascript": _JS,
    "js": _JS,
    "node.js": _JS,
    "scala": "object Main {\n  def main(args:Array[String])\n  {\n    println(\"Hello World!\")\n  }\n\t\t\n}",
    "go": "package main\n\nimport \"fmt\"\n\nfunc main() {\n   fmt.Println(\"Hello, World!\")\n}",
    "c": "#include <stdio.h>\n\nint main()\n{\n   printf(\"Hello, World! \n\");\n   return 0;\n}",
    "c++": _CPP,
    "cpp": _CPP,
    "java": (
        "public class HelloWorld {\n    public static void main(String []args) {\n"
        "       System.out.println(\"Hello World!\");\n    }\n}"
    ),
    "rust": _RUST,
    "rs": _RUST,
    "c#": _CS,
    "cs": _CS,
    "csharp": _CS,
    "shell": _SHELL,
    "bash": _SHELL,
    "erlang": "% escript will ignore the first line\n\nmain(_) ->\n    io:format(\"Hello World!~n\").",
    "perl": "print \"Hello, World!\n\";",
    "python": _PY3,
    "py": _PY3,
    "swift": _SWIFT,
    "lua": _SWIFT,
    "pascal": "runcode Hello;\nbegin\n  writeln ('Hello, world!')\nend.",
    "kotlin": _KOTLIN,
    "kt": _KOTLIN,
    "r": "myString <- \"Hello, World!\"\nprint ( myString)",
    "vb": "Module Module1\n\n    Sub Main()\n        Console.WriteLine(\"Hello World!\")\n    End Sub\n\nEnd Module",
    "typescript": _TS,
    "ts": _TS,
}

LANGUAGES: dict[str, tuple[str, str]] = {
    "py2": ("0", "py"),
    "ruby": ("1", "rb"),
    "rb": ("1", "rb"),
    "php": ("3", "php"),
    "javascript": ("4", "js"),
    "js": ("4", "js"),
    "node.js": ("4", "js"),
    "scala": ("5", "scala"),
    "go": ("6", "go"),
    "c": ("7", "c"),
    "c++": ("7", "cpp"),
    "cpp": ("7", "cpp"),
    "java": ("8", "java"),
    "rust": ("9", "rs"),
    "rs": ("9", "rs"),
    "c#": ("10", "cs"),
    "cs": ("10", "cs"),
    "csharp": ("10", "cs"),
    "shell": ("10", "sh"),
    "bash": ("10", "sh"),
    "erlang": ("12", "erl"),
    "perl": ("14", "pl"),
    "python": ("15", "py3"),
    "py": ("15", "py3"),
    "swift": ("16", "swift"),
    "lua": ("17", "lua"),
    "pascal": ("18", "pas"),
    "kotlin": ("19", "kt"),
    "kt": ("19", "kt"),
    "r": ("80", "r"),
    "vb": ("84", "vb"),
    "typescript": ("1010", "ts"),
    "ts": ("1010", "ts"),
}


class RunCodeError(Exception):
    """The language is unsupported or the service reported a failure."""


def clear_newline_suffix(text: str) -> str:
    """Drop every trailing newline."""
    return text.rstrip("\n")


def cut_too_long(text: str) -> str:
    """Truncate text past 30 line breaks or 1000 characters."""
    count = 0
    last = len(text) - 1
    for i, ch in enumerate(text):
        if ch == "\r" and i < last and text[i + 1] == "\n":
            pass  # the following "\n" counts the break
        elif ch in "\r\n":
            count += 1
        if count > MAX_LINES or i > MAX_CHARS:
            return text[: i - 1] + TRUNCATION
    return text


def lookup_language(language: str) -> tuple[str, str]:
    """Return the service's (language id, file extension) for a language name."""
    try:
        return LANGUAGES[language.lower()]
    except KeyError:
        raise RunCodeError(UNSUPPORTED) from None


def template_for(language: str) -> str:
    """Return the hello-world template for a language name."""
    lookup_language(language)
    return TEMPLATES[language.lower()]


def run_code(code: str, language: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Run ``code`` in ``language`` on the service and return its output."""
    lang_id, ext = lookup_language(language)
    form = urllib.parse.urlencode(
        {
            "code": code,
            "token": API_TOKEN,
            "stdin": "",
            "language": lang_id,
            "fileext": ext,
        }
    ).encode("ascii")
    request = urllib.request.Request(API_URL, data=form, headers=_HEADERS, method="POST")
    try:
        with urllib.request.urlopen(request, timeout=timeout) as resp:
            if resp.status != 200:
                raise RunCodeError("code not 200")
            body = resp.read()
    except urllib.error.HTTPError as exc:
        raise RunCodeError("code not 200") from exc
    except urllib.error.URLError as exc:
        raise RunCodeError(str(exc.reason)) from exc
    content = json.loads(body)
    errors = content.get("errors")
    if not isinstance(errors, str) or errors != "\n\n":
        message = errors if isinstance(errors, str) else ""
        raise RunCodeError(cut_too_long(clear_newline_suffix(message)))
    output = content.get("output")
    if not isinstance(output, str):
        output = ""
    return cut_too_long(clear_newline_suffix(output))