from src.viz.registry import registry
from src.viz.controllers.histogram import HistogramController
from src.viz.controllers.parallel_coordinates import ParallelCoordinatesController
from src.viz.controllers.pie_chart import PieChartController

# Register default charts at import time, in page order
registry.register(HistogramController)
registry.register(PieChartController)
registry.register(ParallelCoordinatesController)
