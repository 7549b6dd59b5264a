"""Test fixtures and configuration for pytest."""

import pytest

from config.settings import DatabaseConfig
from core.records import Averages, DatasetSummary, EquipmentRecord, LoadedDataset
from db.connection import DatabaseClient
from db.kv_store import KeyValueStore


@pytest.fixture
def pump_records():
    """The two-pump dataset used throughout the dashboard examples."""
    return (
        EquipmentRecord(1, "Pump A", "Pump", 220, 50, 80),
        EquipmentRecord(2, "Pump B", "Pump", 100, 40, 60),
    )


@pytest.fixture
def pump_summary():
    return DatasetSummary(
        total_count=2,
        averages=Averages(flowrate=160, pressure=45, temperature=70),
        type_distribution={"Pump": 2},
    )


@pytest.fixture
def plant_records():
    """Mixed equipment with repeated metric values for sort-stability checks."""
    return (
        EquipmentRecord(1, "Pump-1", "Pump", 120.0, 5.2, 110.0),
        EquipmentRecord(2, "Compressor-1", "Compressor", 95.0, 8.4, 95.0),
        EquipmentRecord(3, "Valve-1", "Valve", 60.0, 4.1, 105.0),
        EquipmentRecord(4, "HeatExchanger-1", "HeatExchanger", 150.0, 6.2, 130.0),
        EquipmentRecord(5, "Pump-2", "Pump", 210.0, 5.6, 115.0),
        EquipmentRecord(6, "Reactor-1", "Reactor", 95.0, 7.5, 140.0),
        EquipmentRecord(7, "Valve-2", "Valve", 60.0, 4.5, 102.0),
        EquipmentRecord(8, "Compressor-2", "Compressor", 230.0, 8.9, 100.0),
    )


@pytest.fixture
def plant_summary(plant_records):
    count = len(plant_records)
    distribution = {}
    for record in plant_records:
        distribution[record.type] = distribution.get(record.type, 0) + 1
    return DatasetSummary(
        total_count=count,
        averages=Averages(
            flowrate=sum(r.flowrate for r in plant_records) / count,
            pressure=sum(r.pressure for r in plant_records) / count,
            temperature=sum(r.temperature for r in plant_records) / count,
        ),
        type_distribution=distribution,
    )


@pytest.fixture
def pump_dataset(pump_records, pump_summary):
    return LoadedDataset(dataset_id=7, records=pump_records, summary=pump_summary)


@pytest.fixture
def plant_dataset(plant_records, plant_summary):
    return LoadedDataset(dataset_id=8, records=plant_records, summary=plant_summary)


@pytest.fixture
def kv_store(tmp_path):
    """Key-value store on a throwaway SQLite file."""
    db = DatabaseClient(DatabaseConfig(database=str(tmp_path / "state.db")))
    yield KeyValueStore(db)
    db.close()
