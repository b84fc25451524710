from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Identity service (Firebase Identity Toolkit)
    FIREBASE_API_KEY: str = ""
    IDENTITY_TOOLKIT_URL: str = "https://identitytoolkit.googleapis.com/v1"
    
    # Game backend (callable cloud functions)
    GAME_BACKEND_URL: str = "https://us-central1-cp-multiplayer.cloudfunctions.net"
    FETCH_PLAYER_FUNCTION: str = "GetPlayerRecords2"
    FETCH_VEHICLES_FUNCTION: str = "TestGetAllCars"
    SAVE_PLAYER_FUNCTION: str = "SavePlayerRecordsIOS"
    SAVE_VEHICLE_FUNCTION: str = "SaveCars"
    
    # Some deployments reject vehicle saves without a device identity header
    DEVICE_IDENTITY_HEADER: str = "X-Device-Token"
    DEVICE_IDENTITY_TOKEN: str = ""
    
    # Timeouts (seconds)
    RELAY_TIMEOUT: float = 30.0
    IDENTITY_TIMEOUT: float = 15.0
    FETCH_TIMEOUT: float = 15.0
    VEHICLE_LIST_TIMEOUT: float = 30.0
    SAVE_TIMEOUT: float = 30.0
    
    # Vehicle save pacing
    VEHICLE_SAVE_BATCH_SIZE: int = 3
    VEHICLE_SAVE_DELAY: float = 0.5
    
    # Identifiers
    GENERATED_ID_LENGTH: int = 10
    
    # Clone: keep the nested extraData block of the source record
    CLONE_PRESERVE_EXTRA_DATA: bool = True
    
    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:8080"
    
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 10000
    DEBUG: bool = False
    
    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
