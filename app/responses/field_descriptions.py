"""Field glossaries attached to tool responses.

Each tool response carries descriptions for the fields that actually
appear in its payload, so the model reading the response knows units and
meaning without guessing.
"""

from __future__ import annotations

from typing import Literal

FieldCategory = Literal[
    "workout",
    "whoop",
    "sleep",
    "recovery",
    "fitness",
    "planned",
    "recovery_trends",
    "athlete",
    "strain",
    "wellness",
    "intervals",
    "notes",
    "heat",
    "curves",
    "totals",
]

WORKOUT_FIELD_DESCRIPTIONS: dict[str, str] = {
    "id": "Unique ID of the completed activity in Intervals.icu",
    "start_time": "Activity start time in the athlete's local timezone",
    "start_date_utc": "Activity start time in UTC",
    "activity_type": "Sport of the activity: Cycling, Running, Swimming, Skiing, Hiking, Rowing, Strength or Other",
    "name": "Name of the activity",
    "description": "Description of the activity",
    "duration": "Moving time of the activity (H:MM:SS)",
    "distance": "Total distance of the activity",
    "source": "Source of the data for this activity",
    "intervals_icu_url": "URL to view this activity on Intervals.icu",
    "strava_url": "URL to view this activity on Strava",
    "tss": "Training Stress Score (TSS)",
    "intensity_factor": "Intensity Factor (IF) as a 0-1 fraction of FTP",
    "normalized_power": "Normalized Power (NP) in watts",
    "average_power": "Average power in watts",
    "work_kj": "Total work done, in kilojoules",
    "average_heart_rate": "Average heart rate in beats per minute",
    "max_heart_rate": "Maximum heart rate in beats per minute",
    "average_speed": "Average speed during the activity",
    "max_speed": "Maximum speed during the activity",
    "average_cadence": "Average cadence in RPM (cycling) or steps/min (running)",
    "elevation_gain": "Elevation gain during the activity",
    "calories": "Estimated calories burned",
    "rpe": "Rate of Perceived Exertion (1-10 scale, 1 = nothing at all, 10 = max effort)",
    "feel": "How the athlete felt (1-5 scale, 1 = strong, 3 = normal, 5 = weak)",
    "ctl_at_activity": "Chronic Training Load (CTL/fitness) at time of activity",
    "atl_at_activity": "Acute Training Load (ATL/fatigue) at time of activity",
    "tsb_at_activity": "Training Stress Balance (TSB/form) at time of activity",
    "is_indoor": "Whether the activity was indoor (trainer or virtual)",
    "is_race": "Whether the activity was marked as a race",
    "whoop": "Whoop data recorded for the same session, when a matching Whoop activity was found",
}

WHOOP_FIELD_DESCRIPTIONS: dict[str, str] = {
    "strain_score": (
        "Whoop cardiovascular load on a logarithmic 0-21 scale. "
        "Light: 0-9, Moderate: 10-13, High: 14-17, All out: 18-21"
    ),
    "strain_level": "Whoop's label for the strain score: LIGHT, MODERATE, HIGH or ALL_OUT",
    "strain_level_description": "Whoop's description for the strain level",
    "sport_name": "Sport name as recorded by Whoop",
    "start_time_utc": "Workout start time in UTC",
    "end_time": "Workout end time in the athlete's local timezone",
    "zone_durations": (
        "Time spent in each Whoop heart rate zone (zone_0 to zone_5). Whoop uses heart rate reserve, "
        "so these zones may not match Intervals.icu zones."
    ),
}

SLEEP_FIELD_DESCRIPTIONS: dict[str, str] = {
    "sleep_summary": "Summary of the athlete's sleep stages",
    "total_in_bed_time": "Total time spent in bed",
    "total_awake_time": "Total time awake during the sleep period",
    "total_light_sleep_time": "Total time in light sleep",
    "total_slow_wave_sleep_time": "Total time in deep (slow wave) sleep",
    "total_rem_sleep_time": "Total time in REM sleep",
    "total_restorative_sleep": "Total restorative sleep (slow wave + REM)",
    "sleep_cycle_count": "Number of sleep cycles",
    "disturbance_count": "Number of disturbances during sleep",
    "sleep_hours": "Total time in bed, in hours",
    "respiratory_rate": "Respiratory rate during sleep, in breaths per minute",
    "sleep_performance_percentage": (
        "Time asleep as a percentage of the sleep needed. Optimal: >=85%, Sufficient: 70-85%, Poor: <70%"
    ),
    "sleep_performance_level": "Whoop's label for sleep performance: OPTIMAL, SUFFICIENT or POOR",
    "sleep_performance_level_description": "Whoop's description for the sleep performance level",
    "sleep_start": "Approximate time the athlete fell asleep, in local time",
    "sleep_end": "Approximate time the athlete woke up, in local time",
    "sleep_consistency_percentage": "How closely sleep and wake times matched the previous days, as a percentage",
    "sleep_efficiency_percentage": "Time asleep as a percentage of time in bed",
    "sleep_needed": "Sleep Whoop recommended for the night, broken down by where the need came from",
    "total_sleep_needed": "Total sleep needed: baseline plus debt and strain, minus nap credit",
    "baseline": "Baseline sleep need for the athlete",
    "need_from_sleep_debt": "Extra sleep needed to repay recent sleep debt",
    "need_from_recent_strain": "Extra sleep needed because of recent strain",
    "need_from_recent_nap": "Sleep need removed by naps during the day",
    "naps": "Scored naps taken during the cycle",
    "nap_summary": "Sleep stage summary of the nap",
    "nap_start": "Nap start in local time",
    "nap_end": "Nap end in local time",
}

RECOVERY_FIELD_DESCRIPTIONS: dict[str, str] = {
    "date": "Date of the recovery (YYYY-MM-DD)",
    "recovery_score": (
        "Percentage (0-100) of how prepared the body is to take on strain. "
        "Sufficient: >=67%, Adequate: 34-66%, Low: <34%"
    ),
    "recovery_level": "Whoop's label for the recovery score: SUFFICIENT, ADEQUATE or LOW",
    "recovery_level_description": "Whoop's description for the recovery level",
    "hrv_rmssd": "Heart rate variability (RMSSD), in milliseconds",
    "resting_heart_rate": "Resting heart rate in beats per minute, measured during slow wave sleep",
    "spo2_percentage": "Blood oxygen saturation percentage",
    "skin_temp_celsius": "Skin temperature, in Celsius",
}

RECOVERY_TRENDS_FIELD_DESCRIPTIONS: dict[str, str] = {
    "data": "Daily recovery entries, oldest first",
    "summary": "Aggregates over the period",
    "avg_recovery": "Average recovery score over the period",
    "avg_hrv": "Average HRV (RMSSD) over the period, in milliseconds",
    "avg_sleep_hours": "Average time in bed over the period, in hours",
    "min_recovery": "Lowest recovery score in the period",
    "max_recovery": "Highest recovery score in the period",
}

FITNESS_FIELD_DESCRIPTIONS: dict[str, str] = {
    "period_days": "Number of days covered",
    "sport": "Sport filter applied to the training load (always all sports)",
    "data": "Daily training load metrics, oldest first",
    "date": "Date of the metrics (YYYY-MM-DD)",
    "ctl": "Chronic Training Load (fitness), 42-day exponentially weighted average of daily TSS",
    "atl": "Acute Training Load (fatigue), 7-day exponentially weighted average of daily TSS",
    "tsb": "Training Stress Balance (form) = CTL - ATL. Positive is fresh, negative is fatigued",
    "ramp_rate": "Weekly CTL change. Safe: 3-7 pts/week. Injury risk increases above 10 pts/week",
    "ctl_load": "This day's weighted contribution to CTL",
    "atl_load": "This day's weighted contribution to ATL",
    "summary": "Aggregates over the period",
    "current_ctl": "Most recent CTL (current fitness)",
    "current_atl": "Most recent ATL (current fatigue)",
    "current_tsb": "Most recent TSB (current form)",
    "ctl_trend": "CTL direction over the last two weeks: increasing, stable or decreasing",
    "avg_ramp_rate": "Average weekly CTL change over the period",
    "peak_ctl": "Highest CTL reached in the period",
    "peak_ctl_date": "Date of the highest CTL",
    "acwr": "Acute:Chronic Workload Ratio = ATL/CTL. Optimal: 0.8-1.3. Caution: 1.3-1.5. High risk: >1.5",
    "acwr_status": "ACWR risk assessment: low_risk, optimal, caution or high_risk",
}

PLANNED_WORKOUT_FIELD_DESCRIPTIONS: dict[str, str] = {
    "id": "Unique workout identifier from the source calendar",
    "scheduled_for": "Scheduled start (ISO 8601). All-day entries start at midnight",
    "name": "Workout name",
    "description": "Workout description, possibly including structure",
    "expected_tss": "Expected Training Stress Score",
    "expected_if": "Expected Intensity Factor as a 0-1 fraction of FTP",
    "expected_duration": "Expected duration (H:MM:SS)",
    "discipline": "Discipline: Bike, Run or Swim",
    "workout_type": "Workout category from the description (e.g. Endurance, Threshold)",
    "intervals": "Interval structure text from the description",
    "source": "Calendar source: trainerroad, zwift or intervals.icu",
    "tags": "Tags set on the Intervals.icu calendar event",
    "external_id": "ID linking an Intervals.icu event to a workout on another platform",
}

ATHLETE_FIELD_DESCRIPTIONS: dict[str, str] = {
    "profile": "Athlete profile from Intervals.icu",
    "id": "Intervals.icu athlete ID",
    "name": "Athlete name",
    "city": "City",
    "state": "State or region",
    "country": "Country",
    "timezone": "IANA timezone used for all local dates and times",
    "sex": "Sex as set in Intervals.icu",
    "unit_preferences": "Units the athlete prefers; convert values before presenting them",
    "system": "metric or imperial",
    "weight": "Preferred weight unit: kg or lb",
    "temperature": "Preferred temperature unit: celsius or fahrenheit",
    "date_of_birth": "Date of birth (YYYY-MM-DD)",
    "age": "Age in years",
}

STRAIN_FIELD_DESCRIPTIONS: dict[str, str] = {
    "data": "Daily strain entries",
    "date": "Local date of the Whoop cycle (YYYY-MM-DD)",
    "strain": "Whoop day strain, or absent when today's cycle is not scored yet",
    "average_heart_rate": "Average heart rate over the cycle, in beats per minute",
    "max_heart_rate": "Maximum heart rate over the cycle, in beats per minute",
    "calories": "Calories burned over the cycle",
    "activities": "Whoop workouts recorded during the cycle",
}

WELLNESS_FIELD_DESCRIPTIONS: dict[str, str] = {
    "wellness": "Wellness entries logged in Intervals.icu for the day",
    "data": "Daily wellness entries that have at least one value, oldest first",
    "period_days": "Number of days covered",
    "date": "Date of the entry (YYYY-MM-DD)",
    "weight": "Body weight",
    "resting_hr": "Resting heart rate in beats per minute",
    "hrv": "Heart rate variability (RMSSD), in milliseconds",
    "hrv_sdnn": "Heart rate variability (SDNN), in milliseconds",
    "menstrual_phase": "Menstrual cycle phase",
    "menstrual_phase_predicted": "Predicted menstrual cycle phase",
    "kcal_consumed": "Calories consumed",
    "sleep_duration": "Time asleep",
    "sleep_score": "Sleep score from the wearable that recorded it",
    "sleep_quality": "Subjective sleep quality (1 = great, 4 = poor)",
    "avg_sleeping_hr": "Average heart rate while asleep",
    "soreness": "Muscle soreness (1 = low, 4 = extreme)",
    "fatigue": "Fatigue (1 = low, 4 = extreme)",
    "stress": "Stress (1 = low, 4 = extreme)",
    "mood": "Mood (1 = great, 4 = grumpy)",
    "motivation": "Motivation (1 = extreme, 4 = low)",
    "injury": "Injury (1 = none, 4 = injured)",
    "hydration": "Hydration (1 = good, 4 = poor)",
    "spo2": "Blood oxygen saturation percentage",
    "blood_pressure": "Blood pressure in mmHg",
    "systolic": "Systolic blood pressure in mmHg",
    "diastolic": "Diastolic blood pressure in mmHg",
    "hydration_volume": "Fluid intake in ml",
    "respiration": "Respiration rate in breaths per minute",
    "readiness": "Readiness score from the wearable that recorded it",
    "baevsky_si": "Baevsky stress index",
    "blood_glucose": "Blood glucose in mmol/L",
    "lactate": "Blood lactate in mmol/L",
    "body_fat": "Body fat percentage",
    "abdomen": "Abdominal circumference in cm",
    "vo2max": "Estimated VO2max in ml/kg/min",
    "steps": "Step count",
    "comments": "Free-form comments",
}

INTERVALS_FIELD_DESCRIPTIONS: dict[str, str] = {
    "activity_id": "Intervals.icu activity ID",
    "intervals": "Detected work and recovery intervals, in order",
    "groups": "Repeated intervals grouped together",
    "type": "WORK or RECOVERY",
    "label": "Interval label",
    "group_id": "Group this interval belongs to",
    "start_seconds": "Interval start, in seconds from the activity start",
    "duration": "Interval moving time (H:MM:SS)",
    "distance": "Interval distance",
    "count": "Number of intervals in the group",
    "average_watts": "Average power in watts",
    "max_watts": "Maximum power in watts",
    "normalized_power": "Normalized Power (NP) in watts",
    "watts_per_kg": "Average power per kg of body weight",
    "power_zone": "Power zone of the interval",
    "intensity_factor": "Intensity Factor (IF) as a 0-1 fraction of FTP",
    "interval_tss": "Training Stress Score of the interval",
    "average_hr": "Average heart rate in beats per minute",
    "max_hr": "Maximum heart rate in beats per minute",
    "hr_decoupling": "Heart rate drift against power or pace, as a percentage",
    "average_cadence": "Average cadence in RPM (cycling) or steps/min (running)",
    "stride_length_m": "Average stride length in meters",
    "average_speed": "Average speed",
    "elevation_gain": "Elevation gain",
    "average_gradient": "Average gradient",
    "wbal_start_j": "W' balance at the start, in joules",
    "wbal_end_j": "W' balance at the end, in joules",
    "joules_above_ftp": "Work done above FTP, in joules",
    "min_heat_strain_index": "Lowest heat strain index during the interval",
    "max_heat_strain_index": "Highest heat strain index during the interval",
    "median_heat_strain_index": "Median heat strain index during the interval",
    "start_heat_strain_index": "Heat strain index at the start of the interval",
    "end_heat_strain_index": "Heat strain index at the end of the interval",
    "min_ambient_temperature": "Lowest ambient temperature during the interval, in Celsius",
    "max_ambient_temperature": "Highest ambient temperature during the interval, in Celsius",
    "median_ambient_temperature": "Median ambient temperature during the interval, in Celsius",
    "start_ambient_temperature": "Ambient temperature at the start of the interval, in Celsius",
    "end_ambient_temperature": "Ambient temperature at the end of the interval, in Celsius",
}

NOTES_FIELD_DESCRIPTIONS: dict[str, str] = {
    "activity_id": "Intervals.icu activity ID",
    "notes": "Comments on the activity, oldest first",
    "author": "Who wrote the note",
    "created": "When the note was written",
    "type": "Message type",
    "content": "Note text",
    "attachment_url": "URL of an attached file",
    "attachment_mime_type": "MIME type of the attached file",
    "weather_description": "Weather during the activity, as summarized by Intervals.icu",
}

HEAT_FIELD_DESCRIPTIONS: dict[str, str] = {
    "activity_id": "Intervals.icu activity ID",
    "heat_zones": "Time in each heat strain zone",
    "name": "Heat zone name",
    "low_heat_strain_index": "Lowest heat strain index of the zone",
    "high_heat_strain_index": "Highest heat strain index of the zone; absent for the top zone",
    "time_in_zone": "Time spent in the zone (H:MM:SS)",
    "max_heat_strain_index": "Highest heat strain index during the activity",
    "median_heat_strain_index": "Median heat strain index during the activity",
    "temperature": "Ambient temperature during the activity, in Celsius",
    "min_ambient_temperature": "Lowest ambient temperature",
    "max_ambient_temperature": "Highest ambient temperature",
    "avg_ambient_temperature": "Average ambient temperature",
    "start_ambient_temperature": "Ambient temperature at the start",
    "end_ambient_temperature": "Ambient temperature at the end",
}

CURVES_FIELD_DESCRIPTIONS: dict[str, str] = {
    "period_start": "First day of the analyzed period",
    "period_end": "Last day of the analyzed period",
    "sport": "Sport the curve covers",
    "activity_count": "Number of activities with curve data in the period",
    "durations_analyzed": "Durations the curve was evaluated at",
    "distances_analyzed": "Distances the curve was evaluated at",
    "gap_adjusted": "Whether running pace is gradient adjusted (GAP)",
    "summary": "Best effort per duration or distance; absent when no activity reached it",
    "watts": "Best average power in watts",
    "watts_per_kg": "Best average power per kg of body weight",
    "bpm": "Highest average heart rate in beats per minute",
    "time_seconds": "Best time over the distance, in seconds",
    "pace": "Pace of the best time",
    "activity_id": "Activity the best effort came from",
    "date": "Date of that activity",
    "estimated_ftp": "FTP estimate: 95% of the 20 minute best",
    "comparison": "Change against the comparison period",
    "previous_period_start": "First day of the comparison period",
    "previous_period_end": "Last day of the comparison period",
    "previous_activity_count": "Number of activities in the comparison period",
    "changes": "Change of each best present in both periods",
    "current": "Best in the analyzed period",
    "previous": "Best in the comparison period",
    "change": "current - previous",
    "change_percent": "Change as a percentage of the previous best",
    "improved": "Whether the best improved (higher power or HR, lower time)",
}

TOTALS_FIELD_DESCRIPTIONS: dict[str, str] = {
    "period": "Period the totals cover",
    "start_date": "First day of the period",
    "end_date": "Last day of the period",
    "weeks": "Number of weeks the period spans, rounded up",
    "days": "Number of days in the period",
    "active_days": "Days with at least one activity",
    "totals": "Totals across all sports",
    "by_sport": "Totals per sport",
    "activities": "Number of activities",
    "duration": "Total moving time (H:MM:SS)",
    "distance": "Total distance",
    "climbing": "Total elevation gain",
    "load": "Total training load (TSS)",
    "kcal": "Total calories burned",
    "work": "Total work done",
}

_CATEGORIES: dict[str, dict[str, str]] = {
    "workout": WORKOUT_FIELD_DESCRIPTIONS,
    "whoop": WHOOP_FIELD_DESCRIPTIONS,
    "sleep": SLEEP_FIELD_DESCRIPTIONS,
    "recovery": RECOVERY_FIELD_DESCRIPTIONS,
    "recovery_trends": RECOVERY_TRENDS_FIELD_DESCRIPTIONS,
    "fitness": FITNESS_FIELD_DESCRIPTIONS,
    "planned": PLANNED_WORKOUT_FIELD_DESCRIPTIONS,
    "athlete": ATHLETE_FIELD_DESCRIPTIONS,
    "strain": STRAIN_FIELD_DESCRIPTIONS,
    "wellness": WELLNESS_FIELD_DESCRIPTIONS,
    "intervals": INTERVALS_FIELD_DESCRIPTIONS,
    "notes": NOTES_FIELD_DESCRIPTIONS,
    "heat": HEAT_FIELD_DESCRIPTIONS,
    "curves": CURVES_FIELD_DESCRIPTIONS,
    "totals": TOTALS_FIELD_DESCRIPTIONS,
}


def get_field_descriptions(category: FieldCategory) -> dict[str, str]:
    return dict(_CATEGORIES[category])


def combine_field_descriptions(*categories: FieldCategory) -> dict[str, str]:
    """Merge several categories; later categories win on shared keys."""
    combined: dict[str, str] = {}
    for category in categories:
        combined.update(_CATEGORIES[category])
    return combined
