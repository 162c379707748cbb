import typer
import asyncio
from learnlab.core.errors import GenerationFailure
from learnlab.core.log import setup_logging
from learnlab.schemas.literacy import EnglishTool
from learnlab.services import literacy, simulator
from learnlab.services.llm import get_client

cli_app = typer.Typer()

def _show_turn(turn):
    typer.echo("")
    if turn.image_url:
        typer.echo("[scene illustration generated]")
    typer.echo(turn.description)
    typer.echo("")
    for index, choice in enumerate(turn.choices, start=1):
        typer.echo(f"  {index}. {choice}")

async def _play(prompt: str):
    client = get_client()
    step = await simulator.start_simulation(client, prompt)
    while True:
        _show_turn(step.turn)
        if step.turn.is_final:
            typer.echo("\nSimulation complete! You have reached the end of this simulation path.")
            return
        answer = typer.prompt("\nWhat do you do next? (number, or r to reset)")
        if answer.strip().lower() == "r":
            typer.echo("Simulation reset.")
            return
        if not answer.isdigit() or not 1 <= int(answer) <= len(step.turn.choices):
            typer.echo("Please pick one of the listed choices.")
            continue
        choice = step.turn.choices[int(answer) - 1]
        try:
            step = await simulator.advance_simulation(
                client, prompt, step.history, step.turn.description, choice
            )
        except GenerationFailure as e:
            # History is unchanged, so the same choice can simply be retried.
            typer.echo(f"Error: {e.message}", err=True)

@cli_app.command()
def serve(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """
    Runs the API server.
    """
    import uvicorn
    uvicorn.run("learnlab.main:app", host=host, port=port, reload=reload)

@cli_app.command()
def simulate(prompt: str):
    """
    Plays an interactive simulation in the terminal.
    """
    setup_logging("WARNING")
    try:
        asyncio.run(_play(prompt))
    except (GenerationFailure, ValueError) as e:
        typer.echo(f"Error: {getattr(e, 'message', e)}", err=True)
        raise typer.Exit(code=1)

@cli_app.command()
def tool(name: EnglishTool, text: str):
    """
    Runs an English literacy tool on TEXT.
    """
    if not text.strip():
        typer.echo("Error: Please enter some text.", err=True)
        raise typer.Exit(code=1)
    setup_logging("WARNING")
    state = asyncio.run(literacy.run_tool(get_client(), name, text))
    typer.echo(state.output)
    if state.error:
        raise typer.Exit(code=1)

if __name__ == "__main__":
    cli_app()
