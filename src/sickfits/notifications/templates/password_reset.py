"""Password reset template — sent when a shopper asks for a reset link."""

from html import escape


class PasswordResetTemplate:
    subject = "Your password reset token"

    @staticmethod
    def reset_link(frontend_url: str, token: str) -> str:
        return f"{frontend_url.rstrip('/')}/reset?resetToken={token}"

    @classmethod
    def render(cls, context: dict) -> dict:
        link = cls.reset_link(context["frontend_url"], context["reset_token"])
        name = context.get("name") or "there"
        return {
            "subject": cls.subject,
            "body": (
                f"Hi {name},\n\n"
                "Your password reset token is here!\n\n"
                f"Reset your password: {link}\n\n"
                "The link expires in one hour.\n\n"
                "The SickFits Team"
            ),
            "html_body": cls.wrap(
                f"Your Password Reset Token is here!<br><br>"
                f'<a href="{escape(link, quote=True)}">Click here to reset</a>'
            ),
        }

    @staticmethod
    def wrap(text: str) -> str:
        return (
            '<div class="email" style="border: 1px solid black; padding: 20px; '
            'font-family: sans-serif; line-height: 2; font-size: 20px;">'
            "<h2>Hello There!</h2>"
            f"<p>{text}</p>"
            "<p>😘, The SickFits Team</p>"
            "</div>"
        )
