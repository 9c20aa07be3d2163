"""Command-line interface for the running volume planner."""

import json
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

import click
import pandas as pd
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .activity_import import ActivityImportError, load_activities
from .analysis import (
    calculate_volume_recommendation,
    determine_runner_level,
    generate_training_plan,
    peak_long_run,
    peak_volume_for_level,
    summarize_plan,
    weekly_running_stats,
)
from .analysis.calendar import to_date, week_start
from .config import config
from .models import Activity, RaceGoal, UserProfile, WeeklyVolumePlan

console = Console()

WEEK_TYPE_STYLES = {
    "Peak": "bold green",
    "Taper": "yellow",
    "Cutback": "blue",
    "Build": "white",
}


def _parse_date_option(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return to_date(value)
    except ValueError:
        raise click.ClickException(f"Invalid {name} '{value}', expected YYYY-MM-DD")


def _profile_with_overrides(
    race_goal: Optional[str] = None,
    race_date: Optional[str] = None,
    time_goal: Optional[str] = None,
) -> UserProfile:
    """Configured runner profile with any CLI options applied on top."""
    profile = config.get_user_profile()
    if race_goal:
        try:
            profile.race_goal = RaceGoal.from_string(race_goal)
        except ValueError as e:
            raise click.ClickException(str(e))
    if race_date:
        profile.race_date = _parse_date_option(race_date, "race date")
    if time_goal:
        profile.race_time_goal = time_goal
    return profile


def _resolve_profile(race_goal: Optional[str], race_date: Optional[str], time_goal: Optional[str]) -> UserProfile:
    """Merge CLI options over configured defaults; race goal and date are required."""
    profile = _profile_with_overrides(race_goal, race_date, time_goal)
    try:
        config.validate(profile)
    except ValueError as e:
        raise click.ClickException(f"{e}. Pass --race-goal/--race-date or set them in .env")
    return profile


def _echo_json(data: Dict) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _load_activity_file(path: Optional[str]) -> List[Activity]:
    activities_path = path or config.ACTIVITIES_FILE
    if not activities_path:
        return []
    try:
        return load_activities(activities_path)
    except ActivityImportError as e:
        raise click.ClickException(str(e))


def race_options(func):
    """Options shared by every planning command."""
    func = click.option("--activities", "activities_path", help="Activity export (.json or .csv)")(func)
    func = click.option("--today", help="Date to plan from (YYYY-MM-DD), defaults to today")(func)
    func = click.option("--time-goal", help="Target race time, H:MM:SS")(func)
    func = click.option("--race-date", help="Race date (YYYY-MM-DD)")(func)
    func = click.option("--race-goal", help="Race distance: 10K, HalfMarathon, FullMarathon")(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """Running Volume Planner - periodized weekly distance targets for your race."""
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@race_options
@click.option("--json", "as_json", is_flag=True, help="Print the recommendation as JSON")
def recommend(race_goal, race_date, time_goal, today, activities_path, as_json):
    """Show this week's recommended volume and long run."""
    profile = _resolve_profile(race_goal, race_date, time_goal)
    today_date = _parse_date_option(today, "date") or date.today()
    activities = _load_activity_file(activities_path)

    recommendation = calculate_volume_recommendation(
        today_date,
        profile.race_goal,
        profile.race_date,
        activities,
        profile.race_time_goal,
    )

    if recommendation is None:
        console.print("[yellow]⚠️  Race date is in the past - plan unavailable. Update your race date.[/yellow]")
        return

    if as_json:
        _echo_json(recommendation.to_dict())
        return

    badges = []
    if recommendation.current_week == recommendation.peak_week:
        badges.append("[bold green]🏔️  Peak week[/bold green]")
    if recommendation.is_taper_week:
        badges.append("[yellow]⚡ Taper week[/yellow]")
    if recommendation.is_cutback_week:
        badges.append("[blue]🔄 Cutback week[/blue]")

    console.print(Panel.fit(f"🏃 {profile.race_goal.value} on {profile.race_date.isoformat()}", style="bold blue"))

    table = Table(title="This Week", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Weekly volume", f"{recommendation.weekly_volume_km} km")
    table.add_row("Long run", f"{recommendation.long_run_km} km")
    table.add_row("Week", f"{recommendation.current_week} of {recommendation.total_weeks}")
    table.add_row("Weeks until race", str(recommendation.weeks_until_race))
    table.add_row("Peak week", str(recommendation.peak_week))
    table.add_row("Peak volume", f"{recommendation.peak_volume_km} km")
    table.add_row("Last week volume", f"{recommendation.last_week_volume_km} km")
    table.add_row("Last week long run", f"{recommendation.last_week_long_run_km} km")
    console.print(table)

    if badges:
        console.print("  ".join(badges))


@cli.command()
@race_options
@click.option("--starting-volume", type=float, help="Week 1 volume in km (defaults to last week's actual)")
@click.option("--from", "plan_start", help="Show the plan from this earlier date (YYYY-MM-DD)")
@click.option("--export", "export_path", type=click.Path(dir_okay=False), help="Write the plan to a .csv or .json file")
def plan(race_goal, race_date, time_goal, today, activities_path, starting_volume, plan_start, export_path):
    """Display the full week-by-week volume plan."""
    profile = _resolve_profile(race_goal, race_date, time_goal)
    today_date = _parse_date_option(today, "date") or date.today()

    if starting_volume is None:
        activities = _load_activity_file(activities_path)
        last_week = weekly_running_stats(activities, today_date - timedelta(days=7))
        starting_volume = last_week.total_distance_km or None

    training_plan = generate_training_plan(
        today_date,
        profile.race_goal,
        profile.race_date,
        starting_volume,
        _parse_date_option(plan_start, "start date"),
        profile.race_time_goal,
    )

    if not training_plan:
        console.print("[yellow]⚠️  Race date is in the past - plan unavailable. Update your race date.[/yellow]")
        return

    console.print(Panel.fit(f"📅 {len(training_plan)}-Week {profile.race_goal.value} Volume Plan", style="bold green"))
    console.print(_plan_table(training_plan))

    summary = summarize_plan(training_plan)
    console.print(Panel(
        f"Until race: [bold]{summary.weeks_remaining} weeks[/bold]\n"
        f"This week target: [bold]{summary.current_volume_km} km[/bold]\n"
        f"Peak week volume: [bold]{summary.peak_volume_km} km[/bold]\n"
        f"Peak long run: [bold]{summary.peak_long_run_km} km[/bold]\n"
        f"Total plan volume: [bold]{summary.total_plan_volume_km} km[/bold]",
        title="Summary",
        box=box.ROUNDED,
    ))

    if export_path:
        if export_path.lower().endswith(".json"):
            with open(export_path, "w", encoding="utf-8") as f:
                json.dump(
                    {"summary": summary.to_dict(), "weeks": [week.to_dict() for week in training_plan]},
                    f,
                    indent=2,
                )
        else:
            df = pd.DataFrame([week.to_dict() for week in training_plan])
            df.to_csv(export_path, index=False)
        console.print(f"[green]✅ Plan exported to {export_path}[/green]")


def _plan_table(training_plan: List[WeeklyVolumePlan]) -> Table:
    table = Table(box=box.ROUNDED)
    table.add_column("Week", width=5)
    table.add_column("Starts", width=10)
    table.add_column("Type", width=8)
    table.add_column("Volume", justify="right", style="magenta")
    table.add_column("Long Run", justify="right", style="cyan")

    for week in training_plan:
        style = WEEK_TYPE_STYLES[week.week_type]
        label = f"▶ {week.week_label}" if week.is_current_week else week.week_label
        table.add_row(
            label,
            week.week_start_date.strftime("%Y-%m-%d"),
            f"[{style}]{week.week_type}[/{style}]",
            f"{week.weekly_volume_km} km",
            f"{week.long_run_km} km",
        )
    return table


@cli.command()
@click.option("--activities", "activities_path", help="Activity export (.json or .csv)")
@click.option("--week", help="Any date in the week to summarize (defaults to last week)")
@click.option("--json", "as_json", is_flag=True, help="Print the totals as JSON")
def stats(activities_path, week, as_json):
    """Show running totals for a calendar week."""
    activities = _load_activity_file(activities_path)
    target = _parse_date_option(week, "week") or date.today() - timedelta(days=7)
    monday = week_start(target)

    weekly = weekly_running_stats(activities, monday)

    if as_json:
        _echo_json({"week_start_date": monday.isoformat(), **weekly.to_dict()})
        return

    table = Table(title=f"Week of {monday.isoformat()}", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Total distance", f"{weekly.total_distance_km} km")
    table.add_row("Longest run", f"{weekly.longest_run_km} km")
    table.add_row("Runs", str(weekly.run_count))
    console.print(table)


@cli.command()
@click.option("--race-goal", help="Race distance: 10K, HalfMarathon, FullMarathon")
@click.option("--time-goal", help="Target race time, H:MM:SS")
def level(race_goal, time_goal):
    """Show runner level and peak targets for a race goal."""
    profile = _profile_with_overrides(race_goal=race_goal, time_goal=time_goal)
    goal = profile.race_goal
    if goal is None:
        raise click.ClickException("Missing race goal. Pass --race-goal or set RACE_GOAL in .env")

    time_goal = profile.race_time_goal
    runner_level = determine_runner_level(goal, time_goal)

    console.print(f"Race goal: [bold]{goal.value}[/bold]  Time goal: [bold]{time_goal or '—'}[/bold]")
    console.print(f"Runner level: [bold cyan]{runner_level.value}[/bold cyan]")
    console.print(f"Peak weekly volume: [bold]{peak_volume_for_level(goal, time_goal)} km[/bold]")
    console.print(f"Peak long run: [bold]{peak_long_run(goal)} km[/bold]")


if __name__ == "__main__":
    cli()
