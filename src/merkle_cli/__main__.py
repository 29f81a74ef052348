from __future__ import annotations
import logging
from typing import List, Optional

import typer
from rich import print

from merkle_core import merkle, proof as proofs
from merkle_core.crypto import DIGEST_SIZE, from_hex
from merkle_core.logutil import setup_logging
from merkle_core.render import render_tree
from merkle_core.settings import settings

app = typer.Typer(add_completion=False, no_args_is_help=True)
log = logging.getLogger(__name__)

DEMO_ITEMS = ["apple", "banana", "cherry", "date", "elderberry"]


@app.callback()
def main(
    log_level: str = typer.Option(None, help="Override MERKLE_LOG_LEVEL"),
):
    setup_logging(log_level or settings.log_level)


def _build(items: Optional[List[str]]) -> merkle.MerkleTree:
    return merkle.build(item.encode("utf-8") for item in items or [])


def _parse_digest(value: str, what: str) -> bytes:
    try:
        b = from_hex(value)
    except ValueError:
        raise typer.BadParameter(f"{what} is not valid hex: {value!r}")
    if len(b) != DIGEST_SIZE:
        raise typer.BadParameter(f"{what} must be {DIGEST_SIZE} bytes, got {len(b)}")
    return b


@app.command()
def root(items: Optional[List[str]] = typer.Argument(None, help="Items in order")):
    """Print the root digest of the tree over ITEMS (nothing for no items)."""
    tree = _build(items)
    typer.echo(tree.root_digest_hex)


@app.command()
def prove(
    target: str = typer.Argument(..., help="Item to prove"),
    items: List[str] = typer.Argument(..., help="Items in order"),
):
    """Print the inclusion proof for TARGET, one sibling digest per line."""
    tree = _build(items)
    p = proofs.proof_for(tree, target.encode("utf-8"))
    if p is None:
        print(f"[red]{target!r} is not in the tree[/red]")
        raise typer.Exit(code=1)
    print(f"[cyan]root[/cyan]: {tree.root_digest_hex}")
    print(f"[cyan]index[/cyan]: {p.index}")
    for sibling in p:
        typer.echo(sibling.hex())


@app.command("verify")
def verify_cmd(
    data: str = typer.Argument(..., help="Claimed member"),
    root_hex: str = typer.Argument(..., help="Root digest (hex)"),
    siblings: Optional[List[str]] = typer.Argument(
        None, help="Sibling digests (hex), leaf to root"
    ),
    index: Optional[int] = typer.Option(None, min=0, help="Leaf position, if known"),
):
    """Check an inclusion proof against a root digest."""
    claimed = _parse_digest(root_hex, "root")
    path = [_parse_digest(s, "sibling") for s in siblings or []]
    ok = proofs.verify(data.encode("utf-8"), path, claimed, index=index)
    log.debug("verify data=%s siblings=%d index=%s valid=%s", data, len(path), index, ok)
    print({"valid": ok})
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def show(items: Optional[List[str]] = typer.Argument(None, help="Items in order")):
    """Print the tree structure over ITEMS."""
    typer.echo(render_tree(_build(items)))


@app.command()
def demo():
    """Walk through building, proving, verifying and tamper detection."""
    print("[bold]=== Merkle Tree Demo ===[/bold]")
    print(f"data: {DEMO_ITEMS}")
    tree = _build(DEMO_ITEMS)

    print("\n[bold]=== Tree Structure ===[/bold]")
    typer.echo(render_tree(tree))

    print("\n[bold]=== Root Hash ===[/bold]")
    typer.echo(tree.root_digest_hex)

    print("\n[bold]=== Merkle Proof Test ===[/bold]")
    target = b"banana"
    p = proofs.proof_for(tree, target)
    if p is None:
        print(f"[red]no proof for {target!r}[/red]")
        raise typer.Exit(code=1)
    for i, sibling in enumerate(p):
        typer.echo(f"  {i}: {sibling.hex()}")
    print(f"valid: {proofs.verify(target, p, tree.root_digest)}")

    print("\n[bold]=== Invalid Data Test ===[/bold]")
    if proofs.proof_for(tree, b"grape") is None:
        print("'grape' is not a member (expected)")

    print("\n[bold]=== Tamper Detection Test ===[/bold]")
    tampered = b"BANANA"
    ok = proofs.verify(tampered, p, tree.root_digest)
    print(f"tampered {tampered!r} verifies: {ok} (tampering detected: {not ok})")


if __name__ == "__main__":
    app()
