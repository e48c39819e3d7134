# src/bbn/core/examples.py
"""
The burglary network.

  burglary   earthquake
        \\     /
         alarm
        /     \\
   p1Calls   p2Calls

CPT literals are kept exactly as authored, including alarm's FTF/TFF pair.
"""

from dataclasses import dataclass

from bbn.core.network import Network


@dataclass
class Scenario:
    description: str
    target: dict[str, str]
    evidence: dict[str, str]
    predict: bool = False


def burglary_network() -> Network:
    network = Network(name="burglary")

    burglary = network.add_node("burglary")
    earthquake = network.add_node("earthquake")
    alarm = network.add_node("alarm")
    p1_calls = network.add_node("p1Calls")
    p2_calls = network.add_node("p2Calls")

    # parent order fixes key positions
    alarm.add_parent(burglary)
    alarm.add_parent(earthquake)
    p1_calls.add_parent(alarm)
    p2_calls.add_parent(alarm)

    burglary.cpt.add_entry("T", 0.001)
    burglary.cpt.add_entry("F", 0.999)

    earthquake.cpt.add_entry("T", 0.002)
    earthquake.cpt.add_entry("F", 0.998)

    alarm.cpt.add_entry("TTT", 0.95)
    alarm.cpt.add_entry("TTF", 0.94)
    alarm.cpt.add_entry("TFT", 0.29)
    alarm.cpt.add_entry("TFF", 0.001)
    alarm.cpt.add_entry("FTT", 0.05)
    alarm.cpt.add_entry("FTF", 0.06)
    alarm.cpt.add_entry("FFT", 0.71)
    alarm.cpt.add_entry("FFF", 0.999)

    p1_calls.cpt.add_entry("TT", 0.9)
    p1_calls.cpt.add_entry("TF", 0.05)
    p1_calls.cpt.add_entry("FT", 0.1)
    p1_calls.cpt.add_entry("FF", 0.95)

    p2_calls.cpt.add_entry("TT", 0.7)
    p2_calls.cpt.add_entry("TF", 0.01)
    p2_calls.cpt.add_entry("FT", 0.3)
    p2_calls.cpt.add_entry("FF", 0.99)

    return network


BURGLARY_SCENARIOS = [
    Scenario(
        description="Earthquake given burglary, alarm and only person 1 calling",
        target={"earthquake": "T"},
        evidence={"burglary": "T", "alarm": "T", "p1Calls": "T", "p2Calls": "F"},
    ),
    Scenario(
        description="Alarm given an earthquake, no burglary and only person 1 calling",
        target={"alarm": "?"},
        evidence={"earthquake": "T", "burglary": "F", "p1Calls": "T", "p2Calls": "F"},
        predict=True,
    ),
]
