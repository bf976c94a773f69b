from dataclasses import dataclass


@dataclass
class PageInfo:
    page_number: int
    url: str
