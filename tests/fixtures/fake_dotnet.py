#!/usr/bin/env python3
"""
fake_dotnet.py - 테스트용 외부 툴 대역 (`dotnet new` 호출 패턴 모방)

지원:
- new --list                 → 고정 폭 템플릿 목록
- new --install <packageId>  → FAKE_DOTNET_STATE 파일에 설치 기록
- new <template> --help      → 도움말
- new <template> [--flags]   → cwd/<output>/ 에 파일 3개 생성

환경 변수:
- FAKE_DOTNET_STATE: 설치된 패키지 목록 파일
- FAKE_DOTNET_LISTING=broken: heading 컬럼 수가 다른 목록 출력
- FAKE_DOTNET_SLEEP: sleepy 템플릿 대기 시간(초)
- FAKE_DOTNET_PIDFILE: sleepy 템플릿이 자기 PID 기록
"""

import os
import sys
import time
from pathlib import Path

BASE_TEMPLATES = [
    ("Console Application", "console", "[C#],F#,VB", "Common/Console"),
    ("Class Library", "classlib", "[C#],F#,VB", "Common/Library"),
    ("ASP.NET Core Web API", "webapi", "[C#],F#", "Web/WebAPI"),
    ("Empty Output", "empty", "[C#]", "Test/Empty"),
    ("Sleepy Template", "sleepy", "[C#]", "Test/Slow"),
    ("Noisy Template", "noisy", "[C#]", "Test/Noisy"),
]

PACKS = {
    "Steeltoe.NetCoreTool.Templates": [
        ("Steeltoe Web API", "steeltoe-webapi", "[C#]", "Web/Microservice"),
    ],
}

WIDTHS = (28, 16, 12, 18)
HEADINGS = ("Template Name", "Short Name", "Language", "Tags")


def _row(cells: tuple[str, ...]) -> str:
    return "  ".join(cell.ljust(width) for cell, width in zip(cells, WIDTHS))


def _installed() -> list[str]:
    state = os.getenv("FAKE_DOTNET_STATE")
    if not state or not Path(state).exists():
        return []
    return [line for line in Path(state).read_text().splitlines() if line]


def _templates() -> list[tuple[str, str, str, str]]:
    templates = list(BASE_TEMPLATES)
    for package_id in _installed():
        templates.extend(PACKS.get(package_id, []))
    return templates


def _list() -> int:
    if os.getenv("FAKE_DOTNET_LISTING") == "broken":
        print("Templates  Short")
        print("---------  -----")
        return 0

    print("These templates matched your input: ")
    print()
    print(_row(HEADINGS))
    print("  ".join("-" * width for width in WIDTHS))
    for template in _templates():
        print(_row(template))
    print()
    return 0


def _install(package_id: str) -> int:
    if package_id not in PACKS:
        sys.stderr.write(f"{package_id} could not be installed, the package does not exist")
        return 1
    state = os.getenv("FAKE_DOTNET_STATE")
    if state and package_id not in _installed():
        with open(state, "a", encoding="utf-8") as f:
            f.write(package_id + "\n")
    print(f"Success: {package_id} installed the following templates:")
    return 0


def _output_name(flags: list[str]) -> str:
    for idx, flag in enumerate(flags):
        if flag.startswith("--output="):
            return flag.split("=", 1)[1]
        if flag == "--output" and idx + 1 < len(flags):
            return flags[idx + 1]
    return Path.cwd().name


def _new(template: str, flags: list[str]) -> int:
    known = {short_name: name for name, short_name, _, _ in _templates()}
    if template not in known:
        sys.stderr.write("unknown template")
        return 1

    if "--help" in flags:
        print(f"{known[template]} (C#)")
        print("Options:")
        print("  -f|--framework  The target framework for the project.")
        return 0

    if template == "empty":
        print(f'The template "{known[template]}" was created successfully.')
        return 0

    if template == "sleepy":
        pidfile = os.getenv("FAKE_DOTNET_PIDFILE")
        if pidfile:
            Path(pidfile).write_text(str(os.getpid()))
        time.sleep(float(os.getenv("FAKE_DOTNET_SLEEP", "5")))

    if template == "noisy":
        # 파이프 버퍼보다 큰 출력을 양쪽 스트림에
        sys.stdout.write("o" * 1024 * 1024)
        sys.stderr.write("e" * 1024 * 1024)

    output = _output_name(flags)
    project = Path.cwd() / output
    project.mkdir(parents=True, exist_ok=True)
    (project / "Program.cs").write_text(f"// {template}\n")
    (project / f"{output}.csproj").write_text(f"<Project><!-- {template} --></Project>\n")
    (project / "options.txt").write_text("\n".join(flags) + "\n")

    if template != "noisy":
        print(f'The template "{known[template]}" was created successfully.')
    return 0


def main(argv: list[str]) -> int:
    if not argv or argv[0] != "new":
        sys.stderr.write("Could not execute because the specified command or file was not found.")
        return 1

    args = argv[1:]
    if not args or args[0] == "--list":
        return _list()
    if args[0] == "--install":
        return _install(args[1] if len(args) > 1 else "")
    return _new(args[0], args[1:])


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
