"""Command-line interface for Pitch Engine.

Provides commands for:
- detect: Estimate pitch frame by frame from an audio file
- listen: Live pitch detection from the microphone
- strategies: List the available estimation strategies
- note: Map a frequency to its nearest note
- info: Show audio file information
"""

import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from .core import PitchEngineError

app = typer.Typer(
    name="pitch-engine",
    help="Real-time fundamental frequency estimation",
    rich_markup_mode="markdown",
)
console = Console()


def _build_config(**kwargs):
    from .engine import EngineConfig

    try:
        return EngineConfig(**kwargs)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def detect(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    strategy: str = typer.Option(
        "yin", "-s", "--strategy", help="Estimation strategy (see `strategies`)"
    ),
    frame_size: int = typer.Option(
        4096, "-f", "--frame-size", help="Samples per frame (power of two recommended)"
    ),
    threshold: Optional[float] = typer.Option(
        None, "-t", "--threshold", help="Skip frames at or below this level (dBFS)"
    ),
    sample_rate: Optional[int] = typer.Option(
        None, "--sr", help="Resample to this rate (default: file rate)"
    ),
    realtime: bool = typer.Option(
        False, "--realtime", help="Play the file at its own pace"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show every frame"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Estimate the pitch of every frame in an audio file.

    **Examples:**

        pitch-engine detect tone.wav

        pitch-engine detect voice.wav -s quinns-second -t -40 -v
    """
    from .engine import PitchEngine

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    config = _build_config(
        audio_path=str(input_file),
        strategy=strategy,
        frame_size=frame_size,
        level_threshold=threshold,
        sample_rate=sample_rate,
        realtime=realtime,
    )

    notifications = []
    engine = PitchEngine.from_config(config, callback=notifications.append)

    if not json_output:
        console.print(f"[blue]Detecting pitch:[/blue] {input_file}")
        console.print(f"  Strategy: {config.strategy.value}, frame size: {config.frame_size}")

    start_time = time.time()
    engine.start()
    if engine.active:
        engine.source.wait()
    engine.stop()
    engine.join()
    elapsed = time.time() - start_time

    source_errors = [n for n in notifications if n.is_failure and n.sequence is None]
    if source_errors:
        for notification in source_errors:
            console.print(f"[red]Error: {notification.error}[/red]")
        raise typer.Exit(1)

    summary = _summarize(notifications)
    summary["elapsed"] = elapsed

    if json_output:
        console.print_json(
            data={
                "input": str(input_file),
                "strategy": config.strategy.value,
                "frame_size": config.frame_size,
                "summary": summary,
                "frames": [n.to_dict() for n in notifications],
            }
        )
        return

    if verbose:
        _show_frames_table(notifications)

    _show_summary(summary)


@app.command()
def listen(
    strategy: str = typer.Option(
        "yin", "-s", "--strategy", help="Estimation strategy (see `strategies`)"
    ),
    frame_size: int = typer.Option(
        4096, "-f", "--frame-size", help="Samples per frame"
    ),
    threshold: Optional[float] = typer.Option(
        None, "-t", "--threshold", help="Skip frames at or below this level (dBFS)"
    ),
    sample_rate: Optional[int] = typer.Option(
        None, "--sr", help="Capture rate (default: device rate)"
    ),
    device: Optional[str] = typer.Option(
        None, "-d", "--device", help="Input device id or name"
    ),
    duration: float = typer.Option(
        0.0, "--duration", help="Stop after this many seconds (0 = until Ctrl+C)"
    ),
    show_failures: bool = typer.Option(
        False, "--show-failures", help="Print frames that produced no pitch"
    ),
):
    """Detect pitch live from the microphone. Requires `sounddevice`."""
    from .engine import PitchEngine

    if device is not None and device.isdigit():
        device = int(device)

    config = _build_config(
        strategy=strategy,
        frame_size=frame_size,
        level_threshold=threshold,
        sample_rate=sample_rate,
        device=device,
    )

    def show(notification):
        if notification.is_success:
            pitch = notification.pitch
            offset = pitch.closest_offset
            console.print(
                f"{pitch.frequency:8.2f} Hz  [cyan]{pitch.note.name:<4}[/cyan] "
                f"{offset.cents:+6.1f} cents  [dim]{notification.level:.1f} dBFS[/dim]"
            )
        elif notification.is_failure and (show_failures or notification.sequence is None):
            console.print(f"[yellow]{type(notification.error).__name__}: {notification.error}[/yellow]")

    engine = PitchEngine.from_config(config, callback=show)
    engine.start()
    started = engine.active

    if started:
        console.print(f"[blue]Listening[/blue] ({config.strategy.value}), Ctrl+C to stop")

    try:
        deadline = time.time() + duration if duration > 0 else None
        while engine.active and (deadline is None or time.time() < deadline):
            time.sleep(0.1)
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop()
        engine.join()

    if not started:
        raise typer.Exit(1)


@app.command()
def strategies():
    """List the available estimation strategies."""
    from .estimation import EstimationStrategy

    table = Table(title="Estimation Strategies")
    table.add_column("Name", style="cyan")
    table.add_column("Estimator", style="green")
    table.add_column("Input", style="yellow")

    for strategy in EstimationStrategy:
        estimator = strategy.estimator
        table.add_row(
            strategy.value,
            type(estimator).__name__,
            "spectrum" if strategy.is_spectral else "samples",
        )

    console.print(table)


@app.command()
def note(
    frequency: float = typer.Argument(..., help="Frequency in Hz"),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Map a frequency to its nearest note and offsets."""
    from .pitch import Pitch

    try:
        pitch = Pitch.from_frequency(frequency)
    except PitchEngineError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        console.print_json(data=pitch.to_dict())
        return

    console.print(f"\n[bold]{frequency:.2f} Hz[/bold] → {pitch.note.name}")
    console.print(f"  Wavelength: {pitch.wave.wavelength:.4f} m, period: {pitch.wave.period * 1000:.3f} ms")

    table = Table(title="Offsets")
    table.add_column("Note", style="cyan")
    table.add_column("Note (Hz)", style="green")
    table.add_column("Offset (Hz)", style="yellow")
    table.add_column("Cents", style="magenta")
    table.add_column("%", style="blue")

    for offset in (pitch.offsets.lower, pitch.offsets.higher):
        table.add_row(
            offset.note.name,
            f"{offset.note.frequency:.2f}",
            f"{offset.frequency:+.3f}",
            f"{offset.cents:+.2f}",
            f"{offset.percentage:+.1f}",
        )

    console.print(table)


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
):
    """Show information about an audio file."""
    from .input import AudioLoader
    from .engine import level_db

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    loader = AudioLoader()
    try:
        audio, sr = loader.load(str(input_file))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")
    console.print(f"  Level: {level_db(audio):.1f} dBFS")


def _summarize(notifications) -> Dict[str, Any]:
    """Counts and central pitch of a detection run."""
    successes = [n for n in notifications if n.is_success]
    frequencies = [n.frequency for n in successes]
    notes = Counter(n.pitch.note.name for n in successes)

    errors: Counter = Counter(
        type(n.error).__name__ for n in notifications if n.is_failure
    )

    return {
        "frames": len(notifications),
        "detected": len(successes),
        "failed": sum(errors.values()),
        "skipped": sum(1 for n in notifications if n.is_skip),
        "median_frequency": float(np.median(frequencies)) if frequencies else None,
        "most_common_note": notes.most_common(1)[0][0] if notes else None,
        "errors": dict(errors),
    }


def _show_summary(summary: Dict[str, Any]) -> None:
    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Frames: {summary['frames']}")
    console.print(f"  Detected: {summary['detected']}")
    console.print(f"  Skipped (below threshold): {summary['skipped']}")
    console.print(f"  Failed: {summary['failed']}")
    for name, count in summary["errors"].items():
        console.print(f"    {name}: {count}")
    if summary["median_frequency"] is not None:
        console.print(f"  Median frequency: {summary['median_frequency']:.2f} Hz")
        console.print(f"  Most common note: {summary['most_common_note']}")
    console.print(f"  Processing time: {summary['elapsed']:.2f}s")


def _show_frames_table(notifications: List) -> None:
    """Display per-frame results in a table."""
    table = Table(title="Frames")
    table.add_column("#", style="dim")
    table.add_column("Time (s)", style="green")
    table.add_column("Level (dBFS)", style="yellow")
    table.add_column("Frequency (Hz)", style="cyan")
    table.add_column("Note", style="magenta")
    table.add_column("Status", style="blue")

    for notification in notifications:
        if notification.is_success:
            frequency = f"{notification.frequency:.2f}"
            note_name = notification.pitch.note.name
            status = "ok"
        elif notification.is_skip:
            frequency, note_name, status = "-", "-", "below threshold"
        else:
            frequency = f"{notification.frequency:.2f}" if notification.frequency else "-"
            note_name = "-"
            status = type(notification.error).__name__

        table.add_row(
            str(notification.sequence),
            f"{notification.time:.3f}",
            f"{notification.level:.1f}",
            frequency,
            note_name,
            status,
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
