import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from .app import AppState, build_app
from .errors import ApiError
from .gateway import LOGIN_PATH
from .models import FileIndex, FileItem
from .session_store import (
    DEFAULT_SESSION_PATH,
    load_cookies_from_json,
    load_tokens_from_json,
    load_session,
    save_session,
)
from .utils import format_size


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='fynncloud')
    p.add_argument('--session', default=DEFAULT_SESSION_PATH)
    p.add_argument('--base-url')
    sub = p.add_subparsers(dest='cmd', required=True)

    auth = sub.add_parser('auth')
    auth_sub = auth.add_subparsers(dest='auth_cmd', required=True)
    auth_import = auth_sub.add_parser('import')
    auth_import.add_argument('--cookies', required=True)
    auth_import.add_argument('--tokens')
    auth_import.add_argument('--user', help='JSON file describing the logged-in user')

    quota = sub.add_parser('quota')
    quota.add_argument('--json', action='store_true')

    for name in ('ls', 'trash'):
        listing = sub.add_parser(name)
        listing.add_argument('parent_id', nargs='?')
        listing.add_argument('--json', action='store_true')
    for name in ('recent', 'favorites', 'shared'):
        listing = sub.add_parser(name)
        listing.add_argument('--json', action='store_true')

    mkdir = sub.add_parser('mkdir')
    mkdir.add_argument('name')
    mkdir.add_argument('--parent')

    rm = sub.add_parser('rm')
    rm.add_argument('file_ids', nargs='+')
    rm.add_argument('--permanent', action='store_true')
    rm.add_argument('--yes', action='store_true')

    mv = sub.add_parser('mv')
    mv.add_argument('file_id')
    mv.add_argument('parent_id', nargs='?')

    rename = sub.add_parser('rename')
    rename.add_argument('file_id')
    rename.add_argument('name')

    restore = sub.add_parser('restore')
    restore.add_argument('file_id')

    fav = sub.add_parser('fav')
    fav.add_argument('file_id')

    return p


def _print_index(app: AppState, index: FileIndex, as_json: bool) -> None:
    if as_json:
        print(json.dumps({
            'parent_id': index.parent_id,
            'breadcrumbs': [crumb.__dict__ for crumb in index.breadcrumbs],
            'files': [item.to_dict() for item in index.files],
        }, indent=2))
        return
    if index.breadcrumbs:
        t = app.files.translator.t
        print(' / '.join(t(crumb.label_key) if crumb.label_key else crumb.name for crumb in index.breadcrumbs))
    for item in index.files:
        star = '*' if item.is_favorite else ' '
        size = '-' if item.is_folder or not item.size else item.size
        print(f"{item.id}\t{size}\t{item.type}\t{star}{item.name}")


def _print_item(item: FileItem) -> None:
    print(f"OK: {item.id}\t{item.name}")


def _confirm(text: str) -> bool:
    answer = input(f"{text} [y/N] ")
    return answer.strip().lower() in ('y', 'yes')


async def _describe_delete(app: AppState, file_ids: List[str], permanent: bool) -> str:
    # The listing is only fetched so the prompt can show a name.
    if permanent:
        await app.files.fetch_trash()
    else:
        await app.files.fetch_files()
    items = [app.files.state.find(file_id) for file_id in file_ids]
    known = [item for item in items if item is not None]
    if len(known) == len(file_ids):
        return app.files.delete_description(known, is_trash=permanent)
    t = app.files.translator.t
    action = 'deletePermanent' if permanent else 'delete'
    if len(file_ids) == 1:
        return t(f'files.actions.{action}.descriptionSingle', name=file_ids[0])
    return t(f'files.actions.{action}.descriptionMultiple', count=len(file_ids))


async def _run(args: argparse.Namespace, app: AppState) -> int:
    files = app.files

    if args.cmd == 'quota':
        q = await app.quota.refresh()
        if args.json:
            print(json.dumps({'total_bytes': q.total_bytes, 'used_bytes': q.used_bytes, 'free_bytes': q.free_bytes, 'used_percent': q.used_percent}, indent=2))
        elif q.unlimited:
            print(f"Used {format_size(q.used_bytes)} (Unlimited)")
        else:
            print(f"Used {format_size(q.used_bytes)} / {format_size(q.total_bytes)} ({q.used_percent:.1f}%)")
        return 0

    if args.cmd == 'ls':
        _print_index(app, await files.fetch_files(args.parent_id), args.json)
        return 0
    if args.cmd == 'trash':
        _print_index(app, await files.fetch_trash(args.parent_id), args.json)
        return 0
    if args.cmd == 'recent':
        _print_index(app, await files.fetch_recent(), args.json)
        return 0
    if args.cmd == 'favorites':
        _print_index(app, await files.fetch_favorites(), args.json)
        return 0
    if args.cmd == 'shared':
        _print_index(app, await files.fetch_shared(), args.json)
        return 0

    if args.cmd == 'mkdir':
        _print_item(await files.create_folder(args.name, args.parent))
        return 0

    if args.cmd == 'rm':
        if not args.yes and not _confirm(await _describe_delete(app, args.file_ids, args.permanent)):
            print('Aborted')
            return 1
        if args.permanent:
            await files.delete_files_permanently(args.file_ids)
        else:
            await files.delete_files(args.file_ids)
        print('OK')
        return 0

    if args.cmd == 'mv':
        _print_item(await files.move_file(args.file_id, args.parent_id))
        return 0
    if args.cmd == 'rename':
        _print_item(await files.rename_file(args.file_id, args.name))
        return 0
    if args.cmd == 'restore':
        _print_item(await files.restore_file(args.file_id))
        return 0
    if args.cmd == 'fav':
        item = await files.toggle_favorite(args.file_id)
        print(f"OK: {item.id}\t{'favorite' if item.is_favorite else 'not favorite'}")
        return 0

    return 1


async def _main_async(args: argparse.Namespace, app: AppState) -> int:
    try:
        return await _run(args, app)
    except ApiError as exc:
        if app.router.location == LOGIN_PATH:
            print('Error: session expired, run `fynncloud auth import` again', file=sys.stderr)
            return 2
        print(f'Error: {exc}', file=sys.stderr)
        return 1
    except httpx.HTTPError as exc:
        print(f'Error: {exc}', file=sys.stderr)
        return 1
    finally:
        app.save()
        await app.close()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.cmd == 'auth' and args.auth_cmd == 'import':
        cookies = load_cookies_from_json(args.cookies)
        tokens = load_tokens_from_json(args.tokens) if args.tokens else {}
        user = load_tokens_from_json(args.user) if args.user else None
        save_session(args.session, cookies, tokens, user)
        print(f'OK: session saved to {args.session}')
        return 0

    cookies = None
    tokens = {}
    user = None
    session_path = None
    if args.session and Path(args.session).exists():
        session = load_session(args.session)
        cookies = session.get('cookies')
        tokens = session.get('tokens', {})
        user = session.get('user')
        session_path = args.session

    app = build_app(base_url=args.base_url, cookies=cookies, tokens=tokens, user=user, session_path=session_path)
    return asyncio.run(_main_async(args, app))


if __name__ == '__main__':
    raise SystemExit(main())
