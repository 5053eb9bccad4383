"""Route table of the calculator package."""

from calculator.app import App
from calculator.controller import add, greeting, subtract

app = App()

app.add_route("calculator", greeting, summary="Greeting", tags=["calculator"])
app.add_route("add/{a}/{b}", add, tags=["calculator"])
app.add_route("subtract/{a}/{b}", subtract, tags=["calculator"])
