"""Tool registry - dispatches tool calls to the aggregation tools.

Clients are built from settings; a platform without credentials is left
out and the tools that use it return empty results with a note.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from loguru import logger
from pydantic import ValidationError

from app.config.settings import Settings, settings
from app.core.cache import get_token_cache
from app.core.errors import ToolInputError
from app.integrations.intervals.client import IntervalsClient
from app.integrations.trainerroad.client import TrainerRoadClient
from app.integrations.whoop.client import WhoopClient
from app.integrations.whoop.tokens import WhoopTokenStore
from app.responses.field_descriptions import combine_field_descriptions
from app.responses.hints import generate_hints
from app.responses.response_builder import ToolResponse, build_empty_response, build_tool_response
from app.tools.catalog import CANONICAL_TOOLS, Platform, ToolSpec, get_tool_spec
from app.tools.current import CurrentTools
from app.tools.historical import HistoricalTools
from app.tools.performance import PerformanceTools
from app.tools.planning import PlanningTools

Handler = Callable[[Any], Awaitable[Any]]

PLATFORM_NOTES: dict[Platform, str] = {
    "intervals": (
        "Intervals.icu is not configured, so completed workouts, fitness metrics, wellness, "
        "performance curves and its calendar are unavailable."
    ),
    "whoop": "Whoop is not configured, so recovery, sleep and strain data are unavailable.",
    "trainerroad": "TrainerRoad is not configured, so only Intervals.icu planned workouts are included.",
}


class ToolRegistry:
    """Maps tool names to handlers and renders their results."""

    def __init__(
        self,
        intervals: IntervalsClient | None = None,
        whoop: WhoopClient | None = None,
        trainerroad: TrainerRoadClient | None = None,
    ):
        self.intervals = intervals
        self.whoop = whoop
        self.trainerroad = trainerroad

        if whoop is not None and intervals is not None:
            whoop.set_timezone_getter(intervals.get_athlete_timezone)

        self.current = CurrentTools(intervals, whoop, trainerroad)
        self.historical = HistoricalTools(intervals, whoop)
        self.planning = PlanningTools(intervals, trainerroad)
        self.performance = PerformanceTools(intervals)

        self._handlers: dict[str, Handler] = {
            "get_todays_recovery": lambda args: self.current.get_todays_recovery(),
            "get_recent_workouts": lambda args: self.current.get_recent_workouts(args.days, args.sport),
            "get_todays_planned_workouts": lambda args: self.current.get_todays_planned_workouts(),
            "get_athlete_profile": lambda args: self.current.get_athlete_profile(),
            "get_recent_strain": lambda args: self.current.get_recent_strain(args.days),
            "get_todays_strain": lambda args: self.current.get_todays_strain(),
            "get_todays_wellness": lambda args: self.current.get_todays_wellness(),
            "get_workout_history": lambda args: self.historical.get_workout_history(
                args.start_date, args.end_date, args.sport
            ),
            "get_recovery_trends": lambda args: self.historical.get_recovery_trends(args.start_date, args.end_date),
            "get_training_load_trends": lambda args: self.historical.get_training_load_trends(args.days),
            "get_wellness_trends": lambda args: self.historical.get_wellness_trends(args.start_date, args.end_date),
            "get_workout_intervals": lambda args: self.historical.get_workout_intervals(args.activity_id),
            "get_workout_notes": lambda args: self.historical.get_workout_notes(args.activity_id),
            "get_workout_weather": lambda args: self.historical.get_workout_weather(args.activity_id),
            "get_workout_heat_zones": lambda args: self.historical.get_workout_heat_zones(args.activity_id),
            "get_upcoming_workouts": lambda args: self.planning.get_upcoming_workouts(args.days, args.sport),
            "get_planned_workout_details": lambda args: self.planning.get_planned_workout_details(
                args.workout_id, args.date, args.source
            ),
            "get_power_curve": lambda args: self.performance.get_power_curve(
                args.start_date, args.end_date, args.durations, args.compare_to_start, args.compare_to_end
            ),
            "get_pace_curve": lambda args: self.performance.get_pace_curve(
                args.start_date,
                args.end_date,
                args.sport,
                args.distances,
                args.gap,
                args.compare_to_start,
                args.compare_to_end,
            ),
            "get_hr_curve": lambda args: self.performance.get_hr_curve(
                args.start_date, args.end_date, args.sport, args.durations, args.compare_to_start, args.compare_to_end
            ),
            "get_activity_totals": lambda args: self.performance.get_activity_totals(
                args.start_date, args.end_date, args.sports
            ),
        }

    @classmethod
    def from_settings(cls, config: Settings = settings) -> ToolRegistry:
        timeout = config.http_timeout_seconds

        intervals = None
        if config.intervals_configured:
            intervals = IntervalsClient(config.intervals_api_key, config.intervals_athlete_id, timeout=timeout)

        whoop = None
        if config.whoop_configured:
            whoop = WhoopClient(
                config.whoop_client_id,
                config.whoop_client_secret,
                access_token=config.whoop_access_token,
                refresh_token=config.whoop_refresh_token,
                token_store=WhoopTokenStore(get_token_cache()),
                timeout=timeout,
            )

        trainerroad = None
        if config.trainerroad_configured:
            trainerroad = TrainerRoadClient(config.trainerroad_calendar_url, timeout=timeout)

        logger.info(
            f"[TOOL_REGISTRY] Configured platforms: intervals={intervals is not None} "
            f"whoop={whoop is not None} trainerroad={trainerroad is not None}"
        )
        return cls(intervals, whoop, trainerroad)

    def list_tools(self) -> list[str]:
        return list(CANONICAL_TOOLS.keys())

    def has_tool(self, tool_name: str) -> bool:
        return tool_name in self._handlers

    def _platform_configured(self, platform: Platform) -> bool:
        clients = {"intervals": self.intervals, "whoop": self.whoop, "trainerroad": self.trainerroad}
        return clients[platform] is not None

    def _warnings(self, spec: ToolSpec) -> list[str]:
        return [PLATFORM_NOTES[p] for p in spec.platforms if not self._platform_configured(p)]

    async def call(self, tool_name: str, arguments: dict[str, Any] | None = None) -> ToolResponse:
        """Validate arguments, run the tool and build its text response.

        Raises:
            KeyError: If the tool does not exist
            ToolInputError: If the arguments fail validation
            ApiError: If a platform call fails
        """
        spec = get_tool_spec(tool_name)
        if spec is None or tool_name not in self._handlers:
            raise KeyError(tool_name)

        arguments = arguments or {}
        try:
            tool_input = spec.input_model.model_validate(arguments)
        except ValidationError as e:
            details = "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}" for err in e.errors())
            raise ToolInputError(f"Invalid arguments for {tool_name}: {details}", tool_name, arguments) from e

        logger.info(f"[TOOL_REGISTRY] Calling {tool_name} args={arguments}")
        result = await self._handlers[tool_name](tool_input)

        if result is None:
            return build_empty_response(
                "planned workout",
                "Use get_upcoming_workouts to list scheduled workouts and their IDs.",
            )

        return build_tool_response(
            result,
            combine_field_descriptions(*spec.field_categories),
            next_actions=generate_hints(result, spec.hints),
            warnings=self._warnings(spec) or None,
        )

    async def aclose(self) -> None:
        for client in (self.intervals, self.whoop, self.trainerroad):
            if client is not None:
                await client.aclose()
