from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, ValidationError
from typing import List, Optional
import logging

from .board import Board, IllegalMove
from .config import CONFIG
from .moves import Move
from .search import SearchEngine, SearchResult

logger = logging.getLogger(__name__)

app = FastAPI(title="Othello Move Engine")

# The game viewer calls us from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize AI components
evaluator = CONFIG.make_evaluator()
search_engine = SearchEngine(evaluator, depth=CONFIG.search.depth, max_time_ms=CONFIG.search.max_time_ms)

PASTE_FORM = """
<body><form method=get>
Paste JSON here:<p/><textarea name=json cols=80 rows=24></textarea>
<p/><input type=submit>
</form>
</body>"""


class BoardPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pieces: List[List[StrictInt]] = Field(validation_alias=AliasChoices("Pieces", "pieces"), serialization_alias="Pieces")
    next: StrictInt = Field(validation_alias=AliasChoices("Next", "next"), serialization_alias="Next")


class GameRequest(BaseModel):
    board: BoardPayload = Field(validation_alias=AliasChoices("Board", "board"))


class ApplyRequest(GameRequest):
    move: List[int] = Field(validation_alias=AliasChoices("Move", "move"), min_length=2, max_length=2)


class MoveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    move: Optional[List[int]]
    # "pass" is a keyword
    is_pass: bool = Field(alias="pass")
    score: int
    nodes: int
    depth: int
    game_over: bool
    winner: Optional[int]  # BLACK, WHITE, 0 for a draw; None while play goes on


def payload_to_board(payload: BoardPayload) -> Board:
    """Convert the decoded payload to a Board (raises ValueError)"""
    return Board.from_pieces(payload.pieces, payload.next)


def board_to_payload(board: Board) -> BoardPayload:
    return BoardPayload(pieces=board.grid, next=board.to_move)


def choose_move(board: Board, depth: Optional[int] = None) -> SearchResult:
    """Search the position and log what we saw and what we chose"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("board (to move: %s):\n%s", board.to_move, board.render())
        logger.debug("static eval: %s", evaluator.evaluate(board))

    result = search_engine.search_best_move(board, depth=depth)
    if result.is_pass:
        logger.info("PASS")
    else:
        logger.info("Move to: [%d,%d] (%d) nodes=%d", result.move[0], result.move[1], result.score, result.nodes)
    return result


def format_move(result: SearchResult) -> str:
    if result.is_pass:
        return "PASS"
    x, y = result.move
    return f"[{x},{y}]"


@app.api_route("/", methods=["GET", "POST"])
async def get_move(request: Request):
    """Game server endpoint: JSON game in, "[x,y]" or "PASS" out"""
    js = await request.body()
    if not js:
        js = request.query_params.get("json", "").encode()
    if not js:
        return HTMLResponse(PASTE_FORM)

    try:
        game = GameRequest.model_validate_json(js)
        board = payload_to_board(game.board)
    except (ValidationError, ValueError) as e:
        logger.warning("Rejected payload: %s", e)
        return PlainTextResponse(f"invalid json {js.decode(errors='replace')}? {e}", status_code=400)

    result = await run_in_threadpool(choose_move, board)
    return PlainTextResponse(format_move(result))


@app.post("/move", response_model=MoveResponse, response_model_by_alias=True)
def post_move(game: GameRequest, depth: Optional[int] = Query(None, ge=1, le=8)):
    """Search the posted position and return the chosen move with its score"""
    try:
        board = payload_to_board(game.board)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    result = choose_move(board, depth)
    return MoveResponse(
        move=list(result.move) if result.move else None,
        is_pass=result.is_pass,
        score=result.score,
        nodes=result.nodes,
        depth=result.depth,
        game_over=board.terminal(),
        winner=board.winner(),
    )


@app.post("/apply")
def apply_move(request: ApplyRequest):
    """Play a move on the posted position and return the new board"""
    try:
        board = payload_to_board(request.board)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    where = tuple(request.move)
    played = Move(where, board.to_move)
    try:
        new_board = board.apply(played)
    except IllegalMove as e:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Illegal move",
                "reason": e.reason,
                "detail": str(e),
                "requested": list(where),
                "legal": [list(p) for p in board.valid_moves().positions()],
            },
        )
    return board_to_payload(new_board).model_dump(by_alias=True)


@app.get("/info")
async def get_info():
    """Get engine information"""
    return {
        "engine": "Minimax (fixed depth, no pruning)",
        "depth": search_engine.depth,
        "max_time_ms": search_engine.max_time_ms,
        "evaluation": evaluator.mode,
    }
