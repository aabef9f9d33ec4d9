from dataclasses import dataclass
from typing import List, Optional


@dataclass
class EmailMessage:
    to: List[str]
    from_email: str
    subject: str
    text_body: str
    html_body: Optional[str] = None


@dataclass
class AWSSESCredentials:
    aws_access_key_id: str
    aws_secret_access_key: str
    aws_region_name: str
