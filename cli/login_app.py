"""Main CLI application class for the Kinvey MIC login tool"""

from rich.console import Console
from rich.markup import escape
from rich.pretty import Pretty

from kcs.models import KinveySession
from mic import AuthResult, Credentials, MICAuthFlow, MICConfig, MICError, ProtocolError, TransportError
from utils.debug_console import DebugCapturingConsole


class MICLoginCLI:
    """Runs the MIC login flow and reports the outcome on the console"""

    def __init__(self, config: MICConfig, console: Console, debug: bool = False):
        self.config = config
        self.console = console
        self.debug = debug
        self.flow = MICAuthFlow(config, on_step=self.display_step)

    def display_step(self, number: int, description: str):
        self.console.print(f"\n[bold]Step {number}:[/bold] {description}...")

    async def login(self, credentials: Credentials, exchange_session: bool = False) -> AuthResult:
        """
        Run the flow and display tokens and the session

        Raises:
            MICError: Propagated from the flow after it has been reported
        """
        if isinstance(self.console, DebugCapturingConsole):
            self.console.add_secrets([credentials.password, self.config.app_secret])

        try:
            result = await self.flow.run(credentials, exchange_session=exchange_session)
        except MICError as e:
            self.report_failure(e)
            raise

        if isinstance(self.console, DebugCapturingConsole):
            self.console.add_secrets([
                result.tokens.access_token,
                result.tokens.refresh_token,
                result.session.authtoken if result.session else None,
            ])

        self.display_tokens(result)
        if result.session:
            self.display_session(result.session)
        return result

    def display_tokens(self, result: AuthResult):
        self.console.print("\n[green][OK][/green] Mobile Identity Connect auth completed successfully.")
        self.console.print("Got tokens:")
        self.console.print(Pretty(result.tokens.raw))

    def display_session(self, session: KinveySession):
        action = "Logged in existing user" if session.user_existed else "Created user"
        self.console.print(f"\n[green][OK][/green] {action} [green]{session.username}[/green]")
        self.console.print(
            f"\nKinvey Session token for user [green]{session.username}[/green] "
            f"is [green]{session.authtoken}[/green]"
        )
        self.console.print("\nYou can use cURL to make requests as this user in the following way:")
        self.console.print(
            f"\t[bold green]{escape(session.curl_command(self.config.data_url_root))}[/bold green]\n",
            markup=True,
            highlight=False,
        )

    def report_failure(self, error: MICError):
        """Print a structured report of a failed request"""
        if isinstance(error, ProtocolError):
            self.console.print(f"[red]!!! Error {error.stage}:[/red]")
            for label, value in error.details().items():
                self.console.print(f"[red]!!![/red]     {label + ':':<16} {escape(str(value))}", highlight=False)
        elif isinstance(error, TransportError):
            self.console.print(f"[red]!!! Network error while {error.stage}:[/red] {escape(error.detail)}")
        else:
            self.console.print(f"[red][ERROR][/red] {escape(str(error))}")
