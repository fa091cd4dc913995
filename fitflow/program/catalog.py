"""Bundled workout programs.

Catalog
-------
    Full-Body Express       Intermediate   11 steps   205s active / 95s rest
    Core + Cardio Mix       Beginner       13 steps   255s active / 85s rest
    Upper Body Strength     Intermediate    7 steps   125s active / 75s rest
    Quick Morning Routine   Beginner        5 steps    70s active / 10s rest
    HIIT Blast              Advanced        7 steps   120s active / 45s rest

``get_program`` raises :class:`ProgramNotFoundError` for unknown ids;
``find_program`` returns ``None`` instead.
"""

from __future__ import annotations

from .models import ExerciseStep, Program, ProgramLevel, RestStep


class ProgramNotFoundError(KeyError):
    """Raised when a program id is not in the catalog."""


# ── 1. Full-Body Express ─────────────────────────────────────────────────

FULL_BODY_EXPRESS = Program(
    id="prog_full_body_express",
    title="Full-Body Express",
    level=ProgramLevel.INTERMEDIATE,
    description=(
        "A quick but intense full-body workout that targets all major "
        "muscle groups in under 6 minutes"
    ),
    total_active_sec=205,
    total_rest_sec=95,
    steps_count=11,
    tags=("No equipment", "Full body", "HIIT", "Beginner friendly"),
    estimated_calories=85,
    difficulty=3,
    created_at="2024-01-15T10:00:00Z",
    updated_at="2024-01-15T10:00:00Z",
    steps=(
        ExerciseStep(
            id="fbe_1", title="Jumping Jacks", duration_sec=45,
            description="Start with feet together, jump feet apart while raising arms overhead",
            animation_ref="jumping_jacks", target_reps=30,
        ),
        RestStep(id="fbe_rest_1", duration_sec=15, tip="Catch your breath and hydrate"),
        ExerciseStep(
            id="fbe_2", title="Push-ups", duration_sec=30,
            description="Keep your body in a straight line, lower chest to floor",
            animation_ref="push_ups", target_reps=15,
        ),
        RestStep(id="fbe_rest_2", duration_sec=20, tip="Shake out your arms"),
        ExerciseStep(
            id="fbe_3", title="Bodyweight Squats", duration_sec=40,
            description="Feet shoulder-width apart, lower hips back and down",
            animation_ref="squats", target_reps=20,
        ),
        RestStep(id="fbe_rest_3", duration_sec=15, tip="Feel the burn in your legs"),
        ExerciseStep(
            id="fbe_4", title="Mountain Climbers", duration_sec=30,
            description="Start in plank position, alternate bringing knees to chest",
            animation_ref="mountain_climbers", target_reps=20,
        ),
        RestStep(id="fbe_rest_4", duration_sec=25, tip="Control your breathing"),
        ExerciseStep(
            id="fbe_5", title="Plank Hold", duration_sec=35,
            description="Hold a straight line from head to heels, engage your core",
            animation_ref="plank",
        ),
        RestStep(id="fbe_rest_5", duration_sec=20, tip="Almost done! Stay strong"),
        ExerciseStep(
            id="fbe_6", title="Burpees", duration_sec=25,
            description="Squat down, jump back to plank, push-up, jump forward, jump up",
            animation_ref="burpees", target_reps=8,
        ),
    ),
)


# ── 2. Core + Cardio Mix ─────────────────────────────────────────────────

CORE_CARDIO_MIX = Program(
    id="prog_core_cardio_mix",
    title="Core + Cardio Mix",
    level=ProgramLevel.BEGINNER,
    description=(
        "Perfect blend of core strengthening and cardiovascular "
        "conditioning for beginners"
    ),
    total_active_sec=255,
    total_rest_sec=85,
    steps_count=13,
    tags=("Core", "Cardio", "Beginner", "No equipment"),
    estimated_calories=95,
    difficulty=2,
    created_at="2024-01-15T11:00:00Z",
    updated_at="2024-01-15T11:00:00Z",
    steps=(
        ExerciseStep(
            id="ccm_1", title="High Knees", duration_sec=30,
            description="Run in place lifting knees as high as possible", target_reps=40,
        ),
        RestStep(id="ccm_rest_1", duration_sec=10, tip="Quick recovery, keep moving lightly"),
        ExerciseStep(
            id="ccm_2", title="Bicycle Crunches", duration_sec=45,
            description="Alternate bringing opposite elbow to knee in a cycling motion",
            target_reps=30,
        ),
        RestStep(id="ccm_rest_2", duration_sec=15, tip="Feel your core working"),
        ExerciseStep(
            id="ccm_3", title="Jump Squats", duration_sec=35,
            description="Explosive squat with a jump at the top", target_reps=15,
        ),
        RestStep(id="ccm_rest_3", duration_sec=20, tip="Power through, you got this!"),
        ExerciseStep(
            id="ccm_4", title="Russian Twists", duration_sec=40,
            description="Sit with knees bent, lean back slightly, rotate torso side to side",
            target_reps=25,
        ),
        RestStep(id="ccm_rest_4", duration_sec=15, tip="Keep that core tight"),
        ExerciseStep(
            id="ccm_5", title="Butt Kickers", duration_sec=25,
            description="Run in place kicking heels to glutes", target_reps=30,
        ),
        RestStep(id="ccm_rest_5", duration_sec=15, tip="Final push coming up!"),
        ExerciseStep(
            id="ccm_6", title="Dead Bug", duration_sec=50,
            description="Lie on back, extend opposite arm and leg, return to start",
            target_reps=20,
        ),
        RestStep(id="ccm_rest_6", duration_sec=10, tip="Almost there!"),
        ExerciseStep(
            id="ccm_7", title="Star Jumps", duration_sec=30,
            description="Jump with arms and legs spread wide like a star", target_reps=20,
        ),
    ),
)


# ── 3. Upper Body Strength ───────────────────────────────────────────────

UPPER_BODY_STRENGTH = Program(
    id="prog_upper_body_strength",
    title="Upper Body Strength",
    level=ProgramLevel.INTERMEDIATE,
    description=(
        "Build upper body strength with bodyweight exercises targeting "
        "arms, shoulders, and chest"
    ),
    total_active_sec=125,
    total_rest_sec=75,
    steps_count=7,
    tags=("Upper body", "Strength", "Bodyweight"),
    estimated_calories=65,
    difficulty=3,
    created_at="2024-01-15T12:00:00Z",
    updated_at="2024-01-15T12:00:00Z",
    steps=(
        ExerciseStep(
            id="ubs_1", title="Push-ups", duration_sec=40,
            description="Standard push-ups with proper form", target_reps=20,
        ),
        RestStep(id="ubs_rest_1", duration_sec=20, tip="Shake out your arms and shoulders"),
        ExerciseStep(
            id="ubs_2", title="Pike Push-ups", duration_sec=30,
            description="Targets shoulders and upper chest", target_reps=12,
        ),
        RestStep(id="ubs_rest_2", duration_sec=25, tip="Stretch your shoulders"),
        ExerciseStep(
            id="ubs_3", title="Tricep Dips", duration_sec=35,
            description="Use a chair or bench for support", target_reps=15,
            equipment=("Chair",),
        ),
        RestStep(id="ubs_rest_3", duration_sec=30, tip="Final exercise coming up!"),
        ExerciseStep(
            id="ubs_4", title="Arm Circles", duration_sec=20,
            description="Large circles forward and backward", target_reps=20,
        ),
    ),
)


# ── 4. Quick Morning Routine ─────────────────────────────────────────────

QUICK_MORNING_ROUTINE = Program(
    id="prog_quick_morning",
    title="Quick Morning Routine",
    level=ProgramLevel.BEGINNER,
    description=(
        "Gentle wake-up routine to energize your body and mind for the "
        "day ahead"
    ),
    total_active_sec=70,
    total_rest_sec=10,
    steps_count=5,
    tags=("Morning", "Mobility", "Beginner"),
    estimated_calories=25,
    difficulty=1,
    created_at="2024-01-15T06:00:00Z",
    updated_at="2024-01-15T06:00:00Z",
    steps=(
        ExerciseStep(
            id="qmr_1", title="Arm Swings", duration_sec=15,
            description="Gentle arm swings to wake up your body",
        ),
        ExerciseStep(
            id="qmr_2", title="Neck Rolls", duration_sec=15,
            description="Slow, controlled neck movements",
        ),
        RestStep(id="qmr_rest_1", duration_sec=10, tip="Take a deep breath"),
        ExerciseStep(
            id="qmr_3", title="Gentle Squats", duration_sec=20,
            description="Low-intensity squats to activate legs", target_reps=10,
        ),
        ExerciseStep(
            id="qmr_4", title="Side Bends", duration_sec=20,
            description="Gentle side stretches", target_reps=10,
        ),
    ),
)


# ── 5. HIIT Blast ────────────────────────────────────────────────────────

HIIT_BLAST = Program(
    id="prog_hiit_blast",
    title="HIIT Blast",
    level=ProgramLevel.ADVANCED,
    description=(
        "High-intensity interval training for maximum calorie burn and "
        "cardiovascular improvement"
    ),
    total_active_sec=120,
    total_rest_sec=45,
    steps_count=7,
    tags=("HIIT", "High intensity", "Cardio", "Advanced", "No equipment"),
    estimated_calories=120,
    difficulty=5,
    created_at="2024-01-15T18:00:00Z",
    updated_at="2024-01-15T18:00:00Z",
    steps=(
        ExerciseStep(
            id="hb_1", title="Burpees", duration_sec=30,
            description="Maximum intensity burpees", target_reps=10,
        ),
        RestStep(id="hb_rest_1", duration_sec=15, tip="Catch your breath quickly"),
        ExerciseStep(
            id="hb_2", title="Mountain Climbers", duration_sec=30,
            description="Fast-paced mountain climbers", target_reps=30,
        ),
        RestStep(id="hb_rest_2", duration_sec=15, tip="Stay moving lightly"),
        ExerciseStep(
            id="hb_3", title="Jump Squats", duration_sec=30,
            description="Explosive jump squats", target_reps=15,
        ),
        RestStep(id="hb_rest_3", duration_sec=15, tip="Push through the burn!"),
        ExerciseStep(
            id="hb_4", title="High Knees", duration_sec=30,
            description="Sprint in place with high knees", target_reps=40,
        ),
    ),
)


SAMPLE_PROGRAMS: tuple[Program, ...] = (
    FULL_BODY_EXPRESS,
    CORE_CARDIO_MIX,
    UPPER_BODY_STRENGTH,
    QUICK_MORNING_ROUTINE,
    HIIT_BLAST,
)

_BY_ID: dict[str, Program] = {p.id: p for p in SAMPLE_PROGRAMS}


def find_program(program_id: str) -> Program | None:
    return _BY_ID.get(program_id)


def get_program(program_id: str) -> Program:
    """Look up a bundled program by id."""
    program = _BY_ID.get(program_id)
    if program is None:
        raise ProgramNotFoundError(program_id)
    return program
