"""
Example: Grid Posterior for an Unknown Normal Mean
--------------------------------------------------

Model:
    x_i ~ Normal(θ, 0.8^2)
    θ   ~ Normal(2.3, 0.5^2)

A single observation is drawn around θ = 3.0, the likelihood and prior
are evaluated on 500 grid points in [-10, 10], and their normalized product
approximates the posterior over θ.
"""

import logging

import matplotlib.pyplot as plt
from gridbayes import InferenceConfig, run_inference
from gridbayes.plotting import PlotStyle, plot_result

logging.basicConfig(level=logging.INFO)

config = InferenceConfig(sample_size=1, population_mean=3.0, population_spread=0.8,
                         prior_mean=2.3, prior_spread=0.5, seed=42)
result = run_inference(config)

print("Observed sample:", result.sample)
print("Posterior mean:", result.posterior_mean)
print("Posterior std:", result.posterior.std())
print("95% credible interval:", result.posterior.credible_interval(0.95))

plot_result(result, style=PlotStyle(x_margin=0.0, title="Grid approximation"))
plt.show()
