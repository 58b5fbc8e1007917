"""External collaborators: SMTP, captcha, credential encryption, mail templates."""
