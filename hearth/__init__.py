from hearth.Access import Res, ResMut
from hearth.Application import App, Commands, Module, PreInit, Init, Update, PreRender, Render, PostRender
from hearth.Errors import HearthError, MissingResourceError, BorrowConflictError
from hearth.EventManager import Event, EventBus
from hearth.Handler import Handler, MAX_HANDLER_PARAMS
from hearth.Scheduler import Schedule, ScheduleLabel, Scheduler
from hearth.State import State, TypeKey
from hearth.Time import Time
from hearth.EntryPoint import main
