from clients.dealerscope_dashboard.application.session_provider import SessionProvider, SessionUser
from clients.dealerscope_sdk.auth_client import AuthClient
from clients.dealerscope_sdk.http_client import HttpClient


class AuthAdapter:
    def __init__(self, http: HttpClient, session: SessionProvider) -> None:
        self.session = session
        self.auth_client = AuthClient(http)
        http.register_auth_error_handler(lambda error: session.sign_out())

    async def login(self, email: str, password: str) -> SessionUser:
        payload = await self.auth_client.login(email, password)
        user = SessionUser(user_id=str(payload["user_id"]), access_token=str(payload["access_token"]), email=email)
        self.session.sign_in(user)
        return user

    def logout(self) -> None:
        self.session.sign_out()
