"""
Simulation API routes.
"""

import asyncio
import json
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status, BackgroundTasks
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas import (
    SimulationRunRequest,
    SimulationRunResponse,
    SimulationTaskResponse,
    SimResultResponse,
    ScenarioResultsResponse,
    WeekScenarioResponse,
    ErrorResponse
)
from ...core.config import TIEBREAK_JITTER, SCENARIO_STRENGTH_MODEL
from ...db import get_db, async_session_maker, SimulationTaskRepository
from ...platforms import (
    StaticLeagueSource,
    SimulationInputs,
    load_simulation_inputs,
    LeagueNotFoundError,
    ScheduleUnavailableError,
    PlatformError
)
from ...simulator import (
    TeamRecord,
    LeagueSettings,
    SimResult,
    ScenarioMatchup,
    WeekScenario,
    simulate_season,
    build_week_scenarios,
    sort_by_stakes,
    parse_week_matchups
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/simulations", tags=["simulations"])


def build_source(request: SimulationRunRequest) -> StaticLeagueSource:
    """Wrap the standings and schedule posted by the client as a data source."""
    teams = [TeamRecord(**team.model_dump()) for team in request.standings]
    weeks = [
        parse_week_matchups(
            week.week,
            [[(side.id, side.name) for side in m.teams] for m in week.matchups],
            start_date=week.start_date,
            end_date=week.end_date
        )
        for week in request.weeks
    ]
    settings = LeagueSettings(**request.settings.model_dump())
    return StaticLeagueSource(request.league_id, teams, settings, weeks)


def resolve_scenario_model(baseline_model: str) -> str:
    """Strength model for scenario reruns; follows the baseline unless configured."""
    return SCENARIO_STRENGTH_MODEL or baseline_model


def _week_scenarios_from_json(weeks: List[dict]) -> List[WeekScenario]:
    return [
        WeekScenario(
            week=w["week"],
            start_date=w.get("start_date"),
            end_date=w.get("end_date"),
            matchups=[ScenarioMatchup(**m) for m in w["matchups"]]
        )
        for w in weeks
    ]


async def run_scenario_task(
    task_id: str,
    inputs: SimulationInputs,
    baseline: List[SimResult],
    n_simulations: int,
    strength_model: str,
    seed: Optional[int] = None
):
    """
    Background task to run the scenario pass.

    The simulation runs in a worker thread; this coroutine polls it and
    records progress on the task row.

    Args:
        task_id: The simulation task ID
        inputs: Standings and remaining schedule used for the baseline
        baseline: Baseline results to compare against
        n_simulations: Simulations per forced result
        strength_model: Strength model for the reruns
        seed: Optional seed for reproducible scenarios
    """
    async with async_session_maker() as db:
        task_repo = SimulationTaskRepository(db)

        task = await task_repo.get_by_id(task_id)
        if task is None:
            return

        try:
            await task_repo.update_progress(task, 0)
            await db.commit()

            progress = {"pct": 0.0}

            def progress_callback(pct: float):
                progress["pct"] = pct

            work = asyncio.ensure_future(asyncio.to_thread(
                build_week_scenarios,
                inputs.teams,
                inputs.remaining,
                inputs.weeks,
                inputs.playoff_spots,
                baseline,
                n_simulations=n_simulations,
                strength_model=strength_model,
                seed=seed,
                jitter=TIEBREAK_JITTER,
                progress_callback=progress_callback
            ))

            while not work.done():
                await asyncio.wait({work}, timeout=0.5)
                # Stays below 100 until results are stored
                await task_repo.update_progress(task, min(int(progress["pct"]), 99))
                await db.commit()

            scenarios = work.result()

            await task_repo.complete(task, {
                "n_simulations": n_simulations,
                "weeks": [w.to_dict() for w in scenarios]
            })
            await db.commit()

        except Exception as e:
            logger.exception("Scenario task %s failed", task_id)
            await task_repo.fail(task, str(e))
            await db.commit()


@router.post(
    "/run",
    response_model=SimulationRunResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}
)
async def run_simulation(
    request: SimulationRunRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db)
) -> SimulationRunResponse:
    """
    Simulate the rest of the season for a league.

    Returns the baseline results immediately. The per-matchup scenario pass
    is scheduled in the background; poll it with the returned task ID.
    """
    source = build_source(request)

    try:
        inputs = await load_simulation_inputs(source, request.league_id, request.current_week)
    except LeagueNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"League {request.league_id} not found"
        )
    except ScheduleUnavailableError as e:
        # Schedule comes from the request body, so a gap is a client error
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PlatformError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error communicating with {source.platform_name}: {str(e)}"
        )

    try:
        baseline = await asyncio.to_thread(
            simulate_season,
            inputs.teams,
            inputs.remaining,
            inputs.playoff_spots,
            n_simulations=request.n_simulations,
            strength_model=request.strength_model,
            seed=request.seed,
            jitter=TIEBREAK_JITTER
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    task_id = None
    if request.include_scenarios:
        task_repo = SimulationTaskRepository(db)
        task = await task_repo.create(request.league_id, request.current_week)
        await db.commit()
        task_id = task.id
        background_tasks.add_task(
            run_scenario_task, task.id, inputs, baseline,
            request.scenario_simulations,
            resolve_scenario_model(request.strength_model), request.seed
        )

    team_results = [
        SimResultResponse(**r.to_dict())
        for r in sorted(baseline, key=lambda r: r.playoff_prob, reverse=True)
    ]

    return SimulationRunResponse(
        league_id=request.league_id,
        league_name=inputs.settings.league_name or f"League {request.league_id}",
        current_week=request.current_week,
        playoff_spots=inputs.playoff_spots,
        playoff_start_week=inputs.playoff_start_week,
        weeks_remaining=len(inputs.weeks),
        games_remaining=len(inputs.remaining),
        n_simulations=request.n_simulations,
        teams=team_results,
        scenario_task_id=task_id
    )


@router.get("/{task_id}/status", response_model=SimulationTaskResponse)
async def get_simulation_status(
    task_id: str,
    db: AsyncSession = Depends(get_db)
) -> SimulationTaskResponse:
    """
    Get the status of a scenario pass.
    """
    task_repo = SimulationTaskRepository(db)
    task = await task_repo.get_by_id(task_id)

    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    return SimulationTaskResponse(
        task_id=task.id,
        status=task.status,
        progress=task.progress,
        error=task.error_message
    )


@router.get("/{task_id}/scenarios", response_model=ScenarioResultsResponse)
async def get_scenario_results(
    task_id: str,
    sort: Optional[str] = Query(default=None, pattern="^stakes$"),
    db: AsyncSession = Depends(get_db)
) -> ScenarioResultsResponse:
    """
    Get the week-by-week scenario results of a completed scenario pass.

    Matchups keep schedule order unless ``sort=stakes`` is given.
    """
    task_repo = SimulationTaskRepository(db)
    task = await task_repo.get_by_id(task_id)

    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    if task.status == "pending" or task.status == "running":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Scenario simulation is still running"
        )

    if task.status == "failed":
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Scenario simulation failed: {task.error_message}"
        )

    if task.results_json is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="No results available"
        )

    results = json.loads(task.results_json)
    weeks = _week_scenarios_from_json(results["weeks"])
    if sort == "stakes":
        weeks = sort_by_stakes(weeks)

    return ScenarioResultsResponse(
        task_id=task.id,
        league_id=task.league_id,
        current_week=task.current_week,
        n_simulations=results["n_simulations"],
        weeks=[WeekScenarioResponse(**w.to_dict()) for w in weeks]
    )


@router.get("/{task_id}/stream")
async def stream_simulation_progress(
    task_id: str,
    db: AsyncSession = Depends(get_db)
):
    """
    Stream scenario progress via Server-Sent Events (SSE).

    This allows real-time progress updates without polling.
    """
    task_repo = SimulationTaskRepository(db)
    task = await task_repo.get_by_id(task_id)

    if task is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )

    async def event_generator():
        while True:
            async with async_session_maker() as session:
                repo = SimulationTaskRepository(session)
                current_task = await repo.get_by_id(task_id)

                if current_task is None:
                    yield f"data: {json.dumps({'error': 'Task not found'})}\n\n"
                    break

                data = {
                    "task_id": current_task.id,
                    "status": current_task.status,
                    "progress": current_task.progress
                }

                if current_task.error_message:
                    data["error"] = current_task.error_message

                yield f"data: {json.dumps(data)}\n\n"

                if current_task.status in ("completed", "failed"):
                    break

            await asyncio.sleep(0.5)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        }
    )
