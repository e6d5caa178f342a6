from rich.pretty import pprint

from argot import *

clone = Schema(
    Flag("--progress", descr="enable progress reporting"),
    Flag("-n", "--no-checkout", descr="don't create a checkout"),
    Cardinal("repo", descr="repository to clone"),
    Cardinal("dir", type=path, nargs="?", descr="target directory"),
)

add = Schema(
    Flag("-A", "--all", conflicts="files", descr="add changes from all tracked and untracked files"),
    Flag("-u", "--update", conflicts="files", descr="update tracked files"),
    Cardinal("pathspec", type=path, nargs="*", conflicts="files", descr="file(s) to add/update"),
    required="files",
)

move = Schema(
    Flag("-f", "--force", descr="force move/rename even if target exists"),
    Cardinal("source", type=path, nargs="+", descr="file(s) to move"),
    Cardinal("destination", type=path, descr="target file name or destination directory"),
)

commit = Schema(
    Flag("-a", "--all", conflicts="files", descr="commit all changed files"),
    Flag("--amend", descr="amend previous commit"),
    Option("-m", "--message", metavar="msg", descr="commit message"),
    Cardinal("pathspec", type=path, nargs="*", conflicts="files", descr="file(s) to commit"),
    required="files",
)

git = Schema(
    Option("-C", "--dir", metavar="path", type=path, descr="set working directory"),
    Flag("-v", "--verbose", count=True, descr="increase verbosity"),
    Selector(
        "subcommand",
        Subcommand("clone", schema=clone, descr="clone repository"),
        Subcommand("add", schema=add, descr="add file(s)"),
        Subcommand("move", "mv", schema=move, descr="move or rename file(s)"),
        Subcommand("commit", "co", schema=commit, descr="commit changes"),
        descr="command to run",
    ),
    name="git",
    version="2.47.0",
)


if __name__ == '__main__':
    pprint(invoke(git))
