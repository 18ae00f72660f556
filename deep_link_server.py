# deep_link_server.py

from typing import Any, Dict

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from config import HTTP_HOST, HTTP_PORT
from nlu import NLUResult
from logger_config import get_logger

logger = get_logger(__name__)

app = FastAPI()

controller = None  # Controller receiving every trigger


class NLUResultIn(BaseModel):
    intent: str
    # a slot is {"rawValue": ...}, {"raw_value": ...} or a plain string
    slots: Dict[str, Any] = {}
    utterance: str = ""
    confidence: float = 1.0


def set_controller(ctrl):
    global controller
    controller = ctrl


def _require_controller():
    if controller is None:
        raise HTTPException(status_code=503, detail="Controller not ready")
    return controller


def _response(resolved):
    ctrl = _require_controller()
    ctrl.switchboard.wait_idle()
    return {
        "resolved": None if resolved is None else {"device": resolved[0], "on": resolved[1]},
        "states": ctrl.switchboard.states(),
    }


# handlers are plain def: wait_idle() blocks, so they run in the threadpool
@app.get("/control")
def control(request: Request):
    """Deep link: /control?device=kitchen&command=off"""
    ctrl = _require_controller()
    resolved = ctrl.handle_uri(str(request.url))
    return _response(resolved)


@app.post("/nlu")
def nlu_result(payload: NLUResultIn):
    ctrl = _require_controller()
    result = NLUResult.from_dict(payload.model_dump())
    resolved = ctrl.handle_nlu_result(result)
    return _response(resolved)


@app.get("/devices")
def devices():
    ctrl = _require_controller()
    ctrl.switchboard.wait_idle()
    return ctrl.switchboard.states()


def start_server(ctrl, host=HTTP_HOST, port=HTTP_PORT):
    """Run the deep link server, blocking."""
    set_controller(ctrl)
    logger.info(f"DeepLinkServer: ✅ listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="warning")
