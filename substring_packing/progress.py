import typer

def echo(message):
    typer.echo(message)

class Recorder:
    def __init__(self):
        self.messages = []

    def __call__(self, message):
        self.messages.append(message)
