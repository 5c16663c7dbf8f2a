"""CLI interface with subcommand routing and the interactive menu."""

import argparse
import logging
import sys
from contextlib import closing

from anki_sentence_audio.constants import (
    AUDIO_FILE_PREFIX,
    FIELD_PREVIEW_CHARS,
    TTS_PROVIDERS,
    VERSION,
)
from anki_sentence_audio.config import Config, load_config
from anki_sentence_audio.fields import split_fields
from anki_sentence_audio.audio_list import write_audio_list, load_audio_list
from anki_sentence_audio.store import (
    open_collection,
    count_records,
    sample_records,
    load_note_types,
)
from anki_sentence_audio.tts import ElevenLabsClient, EdgeVoiceClient, generate_audio
from anki_sentence_audio.workflow import compute_updates, commit, describe_plan


MENU = """
1. Analyze database structure
2. Modify notes with audio (dry run)
3. Generate text file with sentences and modify notes
4. Generate audio from text file
5. Generate audio and modify notes (all in one)
6. Extract existing audio to text file (regenerate text file)"""


def _load_config(args) -> Config:
    """Environment config with command-line overrides applied."""
    try:
        config = load_config(args.env_file)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)
    if args.collection:
        config.collection_path = args.collection
    if args.media_dir:
        config.media_directory = args.media_dir
    if args.provider:
        config.tts_provider = args.provider
    return config


def _open_collection(config: Config):
    try:
        return open_collection(config.collection_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Please ensure the collection is in the correct location.", file=sys.stderr)
        raise SystemExit(1)


def _make_client(config: Config):
    """Build the synthesis client, prompting for an API key when needed."""
    if config.tts_provider == "edge":
        return EdgeVoiceClient()

    api_key = config.api_key
    if not api_key:
        api_key = input("Please enter your ElevenLabs API key: ").strip()
        if not api_key:
            print("Error: API key is required for audio generation.", file=sys.stderr)
            raise SystemExit(1)
    return ElevenLabsClient(api_key)


def _confirm(count: int, assume_yes: bool) -> bool:
    """Ask before writing. Only "y" (any case) counts as yes."""
    if assume_yes:
        return True
    try:
        response = input(f"\nDo you want to apply these changes to {count} notes? (y/N): ")
    except EOFError:
        response = ""
    return response.strip().lower() == "y"


def _commit_if_confirmed(conn, plan, assume_yes: bool) -> int:
    if not plan.updates:
        return 0
    if not _confirm(len(plan.updates), assume_yes):
        print("No changes applied.")
        return 0
    applied = commit(conn, plan)
    print(f"Successfully updated {applied} notes!")
    return applied


def _write_list(config: Config, list_path: str | None, tasks) -> None:
    if not tasks:
        return
    path = write_audio_list(list_path or config.audio_list_path, tasks)
    print(f"Generated text file: {path} with {len(tasks)} entries")
    print("Use option 4 (or the 'generate' command) to generate audio from this file.")


def cmd_inspect(args):
    """Show note types, note count and a few sample notes."""
    config = _load_config(args)
    print("Analyzing Anki database...")

    with closing(_open_collection(config)) as conn:
        note_types = load_note_types(conn)
        total = count_records(conn)
        samples = sample_records(conn)

    if note_types:
        print("\n=== NOTE TYPES (MODELS) ===")
        for note_type in note_types:
            print(f"\nModel ID: {note_type.id}")
            print(f"Name: {note_type.name}")
            print("Fields:")
            for i, name in enumerate(note_type.field_names):
                print(f"  [{i}] {name}")

    print("\n=== STATISTICS ===")
    print(f"Total notes: {total}")

    print("\n=== SAMPLE NOTES ===")
    for record in samples:
        print(f"\nNote ID: {record.id}")
        print(f"Model ID: {record.type_id}")
        print("Field values:")
        for i, value in enumerate(split_fields(record.fields_blob)):
            if len(value) > FIELD_PREVIEW_CHARS:
                value = value[:FIELD_PREVIEW_CHARS] + "..."
            print(f"  [{i}] {value}")


def cmd_dry_run(args):
    """Preview which notes would get audio references. Never writes."""
    config = _load_config(args)
    print("\nAnalyzing notes for audio modification...")

    with closing(_open_collection(config)) as conn:
        plan = compute_updates(conn)

    describe_plan(plan)
    if plan.updates:
        print(
            f"\nAudio files will be named: {AUDIO_FILE_PREFIX}1.mp3 "
            f"to {AUDIO_FILE_PREFIX}{len(plan.updates)}.mp3"
        )


def cmd_export(args):
    """Annotate notes (after confirmation) and write the audio list file."""
    config = _load_config(args)
    print("\nAnalyzing notes for audio modification...")

    with closing(_open_collection(config)) as conn:
        plan = compute_updates(conn, extract_existing=True)
        describe_plan(plan)
        _commit_if_confirmed(conn, plan, args.yes)

    _write_list(config, args.list_path, plan.tasks)


def cmd_generate(args):
    """Generate audio for every entry of an audio list file."""
    config = _load_config(args)
    client = _make_client(config)
    if args.prompt_for_list:
        path = input(f"Enter path to text file (default: {config.audio_list_path}): ").strip()
        args.list_path = path or None
    list_path = args.list_path or config.audio_list_path

    try:
        tasks = load_audio_list(list_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    print(f"Loaded {len(tasks)} entries from {list_path}")
    generate_audio(tasks, client, config.media_directory, delay=config.request_delay)


def cmd_apply(args):
    """Annotate notes (after confirmation) and generate their audio."""
    config = _load_config(args)

    with closing(_open_collection(config)) as conn:
        client = _make_client(config)
        print("\nAnalyzing notes for audio modification...")
        plan = compute_updates(conn)
        describe_plan(plan)
        _commit_if_confirmed(conn, plan, args.yes)

    if plan.tasks:
        print("\nGenerating audio files...")
        generate_audio(plan.tasks, client, config.media_directory, delay=config.request_delay)


def cmd_reexport(args):
    """Rewrite the audio list from markers already in the notes.

    Notes without a marker are left out; their files would not be
    referenced by any note.
    """
    config = _load_config(args)
    print("\nExtracting audio entries...")

    with closing(_open_collection(config)) as conn:
        plan = compute_updates(conn, extract_existing=True)

    new_tasks = plan.new_tasks
    existing = [t for t in plan.tasks if t not in new_tasks]
    print(f"\nFound {len(existing)} existing audio entries")
    _write_list(config, args.list_path, existing)


MENU_COMMANDS = {
    "1": cmd_inspect,
    "2": cmd_dry_run,
    "3": cmd_export,
    "4": cmd_generate,
    "5": cmd_apply,
    "6": cmd_reexport,
}


def cmd_menu(args):
    """Numbered interactive menu over the six commands."""
    print(MENU)
    choice = input("\nSelect option (1-6): ").strip()
    func = MENU_COMMANDS.get(choice)
    if func is None:
        print("Invalid choice.")
        return

    args.yes = False
    args.list_path = None
    args.prompt_for_list = func is cmd_generate
    func(args)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="anki-sentence-audio",
        description="Add generated Czech sentence audio to an Anki collection",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--collection", help="Path to the Anki collection file")
    parser.add_argument("--media-dir", help="Directory to write audio files into")
    parser.add_argument("--provider", choices=TTS_PROVIDERS, help="Speech provider")
    parser.add_argument("--env-file", help="Load environment variables from this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    inspect_parser = subparsers.add_parser("inspect", help="Analyze database structure")
    inspect_parser.set_defaults(func=cmd_inspect)

    dry_parser = subparsers.add_parser("dry-run", help="Show which notes would get audio")
    dry_parser.set_defaults(func=cmd_dry_run)

    export_parser = subparsers.add_parser("export", help="Modify notes and write the audio list")
    export_parser.add_argument("--list", dest="list_path", help="Audio list file to write")
    export_parser.add_argument("-y", "--yes", action="store_true", help="Apply without asking")
    export_parser.set_defaults(func=cmd_export)

    generate_parser = subparsers.add_parser("generate", help="Generate audio from the audio list")
    generate_parser.add_argument("--list", dest="list_path", help="Audio list file to read")
    generate_parser.set_defaults(func=cmd_generate, prompt_for_list=False)

    apply_parser = subparsers.add_parser("apply", help="Modify notes and generate audio")
    apply_parser.add_argument("-y", "--yes", action="store_true", help="Apply without asking")
    apply_parser.set_defaults(func=cmd_apply)

    reexport_parser = subparsers.add_parser("reexport", help="Rewrite the audio list only")
    reexport_parser.add_argument("--list", dest="list_path", help="Audio list file to write")
    reexport_parser.set_defaults(func=cmd_reexport)

    menu_parser = subparsers.add_parser("menu", help="Interactive numbered menu")
    menu_parser.set_defaults(func=cmd_menu)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        print("=== Anki sentence audio ===")
        cmd_menu(args)
        return

    args.func(args)
