"""Portfolio admin client: project media management and API access"""

__version__ = "1.0.0"
