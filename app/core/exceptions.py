# custom exception 정의 및 관리
# 모든 예외는 code + 문제가 된 식별자만 전달, HTTP 변환은 API 레이어 담당


class SubwayMapException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ========== 그래프 빌드 ==========


class MalformedLineError(SubwayMapException):
    def __init__(self, line_id, message: str = None):
        self.line_id = line_id
        super().__init__(
            message or f"노선 구간이 연결되어 있지 않습니다: line={line_id}",
            code="MALFORMED_LINE",
        )


class UnknownStationError(SubwayMapException):
    def __init__(self, station_id, line_id=None):
        self.station_id = station_id
        self.line_id = line_id
        super().__init__(
            f"구간이 등록되지 않은 역을 참조합니다: station={station_id}, line={line_id}",
            code="UNKNOWN_STATION",
        )


# ========== 경로 탐색 ==========


class StationNotFoundError(SubwayMapException):
    def __init__(self, station_id, message: str = None):
        self.station_id = station_id
        super().__init__(
            message or f"역을 찾을 수 없습니다: {station_id}",
            code="STATION_NOT_FOUND",
        )


class SameStationError(SubwayMapException):
    def __init__(self, station_id):
        self.station_id = station_id
        super().__init__(
            f"출발역과 도착역이 같습니다: {station_id}", code="SAME_STATION"
        )


class NoPathError(SubwayMapException):
    def __init__(self, source_id, target_id):
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(
            f"경로를 찾을 수 없습니다: {source_id} → {target_id}", code="NO_PATH"
        )


# ========== 요금 ==========


class InvalidDistanceError(SubwayMapException):
    def __init__(self, distance):
        self.distance = distance
        super().__init__(
            f"요금 계산 거리는 0보다 커야 합니다: {distance}", code="INVALID_DISTANCE"
        )


# ========== 노선/역/즐겨찾기 관리 ==========


class LineNotFoundError(SubwayMapException):
    def __init__(self, line_id):
        self.line_id = line_id
        super().__init__(f"노선을 찾을 수 없습니다: {line_id}", code="LINE_NOT_FOUND")


class InvalidEdgeError(SubwayMapException):
    def __init__(self, message: str = "유효하지 않은 구간입니다", line_id=None):
        self.line_id = line_id
        super().__init__(message, code="INVALID_EDGE")


class StationInUseError(SubwayMapException):
    def __init__(self, station_id, line_ids=()):
        self.station_id = station_id
        self.line_ids = list(line_ids)
        super().__init__(
            f"노선에 등록된 역은 삭제할 수 없습니다: station={station_id}, lines={self.line_ids}",
            code="STATION_IN_USE",
        )


class FavoriteNotFoundError(SubwayMapException):
    def __init__(self, favorite_id):
        self.favorite_id = favorite_id
        super().__init__(
            f"즐겨찾기를 찾을 수 없습니다: {favorite_id}", code="FAVORITE_NOT_FOUND"
        )
